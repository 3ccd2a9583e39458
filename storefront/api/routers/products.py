#storefront/api/routers/products.py
from typing import Any, Dict
from urllib.parse import urlencode

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    AddToCartIn,
    MessageOut,
    PageRef,
    ProductListOut,
    ProductOut,
)
from storefront.services.cart_service import CartService
from storefront.services.product_service import ProductService
from storefront.utils.settings import PRODUCTS_PAGE_LIMIT

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


def format_link(ref: PageRef | None, base: str = "/api/products") -> str | None:
    if ref is None:
        return None
    params = {"limit": ref.limit, "page": ref.page}
    if ref.sort:
        params["sort"] = ref.sort
    if ref.query:
        params["query"] = ref.query
    return f"{base}?{urlencode(params)}"


@router.get("/", response_model=ProductListOut)
def list_products(
    limit: int = Query(PRODUCTS_PAGE_LIMIT),
    page: int = Query(1),
    sort: str | None = Query(None),
    query: str | None = Query(None),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    result = svc.list_products(limit=limit, page=page, sort=sort, query=query)
    return ProductListOut(
        payload=result.docs,
        total_pages=result.total_pages,
        prev_page=result.prev_page,
        next_page=result.next_page,
        page=result.page,
        has_prev_page=result.has_prev_page,
        has_next_page=result.has_next_page,
        prev_link=format_link(result.prev_link),
        next_link=format_link(result.next_link),
    )


@router.post("/addProduct", response_model=MessageOut)
def add_product_to_cart(payload: AddToCartIn, db: Session = Depends(get_db)):
    CartService(db).add_product(payload.cart_id, payload.product_id)
    return {"message": "Product added to cart"}


@router.get("/{pid}", response_model=ProductOut)
def get_product(pid: str, db: Session = Depends(get_db)):
    return get_service(db).get_product(pid)


@router.post("/", response_model=ProductOut, status_code=201)
def create_product(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Validation happens in the service, so missing fields come back as 400."""
    return get_service(db).add_product(payload)


@router.put("/{pid}", response_model=ProductOut)
def update_product(pid: str, payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return get_service(db).update_product(pid, payload)


@router.delete("/{pid}", response_model=MessageOut)
def delete_product(pid: str, db: Session = Depends(get_db)):
    get_service(db).delete_product(pid)
    return {"message": "Product deleted successfully"}
