#storefront/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    AddToCartIn,
    CartOut,
    MessageOut,
    QuantityIn,
    ReplaceCartIn,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db)


@router.get("/", response_model=List[CartOut])
def list_carts(db: Session = Depends(get_db)):
    return get_service(db).list_carts()


@router.post("/", response_model=CartOut, status_code=201)
def create_cart(db: Session = Depends(get_db)):
    return get_service(db).create_cart()


@router.post("/addProduct", response_model=MessageOut)
def add_product(payload: AddToCartIn, db: Session = Depends(get_db)):
    get_service(db).add_product(payload.cart_id, payload.product_id)
    return {"message": "Product added to cart successfully"}


@router.get("/{cid}", response_model=CartOut)
def get_cart(cid: str, db: Session = Depends(get_db)):
    return get_service(db).get_cart(cid)


@router.post("/{cid}/product/{pid}", response_model=CartOut)
def add_item(cid: str, pid: str, db: Session = Depends(get_db)):
    return get_service(db).add_product(cid, pid)


@router.put("/{cid}/product/{pid}", response_model=CartOut)
def update_quantity(cid: str, pid: str, payload: QuantityIn, db: Session = Depends(get_db)):
    return get_service(db).update_quantity(cid, pid, payload.quantity)


@router.delete("/{cid}/product/{pid}", response_model=MessageOut)
def remove_item(cid: str, pid: str, db: Session = Depends(get_db)):
    get_service(db).remove_item(cid, pid)
    return {"message": "Product removed from cart"}


@router.put("/{cid}", response_model=CartOut)
def replace_contents(cid: str, payload: ReplaceCartIn, db: Session = Depends(get_db)):
    return get_service(db).replace_contents(cid, payload.products)


@router.delete("/{cid}", response_model=MessageOut)
def empty_cart(cid: str, db: Session = Depends(get_db)):
    get_service(db).empty_cart(cid)
    return {"message": "Cart emptied successfully"}
