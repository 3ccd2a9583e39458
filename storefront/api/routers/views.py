#storefront/api/routers/views.py
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from storefront.api.errors import public_message, status_for
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.services.cart_service import CartService
from storefront.services.product_service import SORT_ORDERS, ProductService
from storefront.utils.settings import VIEW_PAGE_LIMIT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["views"], include_in_schema=False)


def render_error(request: Request, exc: StorefrontError):
    code = status_for(exc)
    logger.warning(f"View {request.url.path} failed: {exc}")
    return templates.TemplateResponse(
        request, "error.html", {"message": public_message(exc)}, status_code=code
    )


@router.get("/")
def home(request: Request):
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/products")
def products_page(
    request: Request,
    page: int = Query(1),
    limit: int = Query(VIEW_PAGE_LIMIT),
    sort: str = Query("asc"),
    query: str = Query(""),
    db: Session = Depends(get_db),
):
    valid_sort = sort if sort in SORT_ORDERS else "asc"
    try:
        result = ProductService(db).list_products(
            limit=limit, page=page, sort=valid_sort, query=query or None
        )
        carts = CartService(db).list_carts()
    except StorefrontError as e:
        return render_error(request, e)

    #view model keeps the names the templates were written against
    return templates.TemplateResponse(
        request,
        "products.html",
        {
            "productos": result.docs,
            "carts": carts,
            "hasPrevPage": result.has_prev_page,
            "hasNextPage": result.has_next_page,
            "prevPage": result.prev_page,
            "nextPage": result.next_page,
            "currentPage": result.page,
            "totalPages": result.total_pages,
            "limit": limit,
            "sort": valid_sort,
            "query": query,
        },
    )


@router.get("/products/add")
def add_product_page(request: Request):
    return templates.TemplateResponse(request, "add_product.html", {})


@router.get("/products/{pid}")
def product_detail(request: Request, pid: str, db: Session = Depends(get_db)):
    try:
        product = ProductService(db).get_product(pid)
        carts = CartService(db).list_carts()
    except StorefrontError as e:
        return render_error(request, e)
    return templates.TemplateResponse(
        request, "product_detail.html", {"product": product, "carts": carts}
    )


@router.get("/carts")
def carts_page(request: Request, db: Session = Depends(get_db)):
    try:
        carts = CartService(db).list_carts()
    except StorefrontError as e:
        return render_error(request, e)
    return templates.TemplateResponse(request, "carts.html", {"carts": carts})


@router.get("/carts/{cid}")
def cart_detail(request: Request, cid: str, db: Session = Depends(get_db)):
    try:
        cart = CartService(db).get_cart(cid)
    except StorefrontError as e:
        return render_error(request, e)
    return templates.TemplateResponse(request, "cart_detail.html", {"cart": cart})


@router.get("/realtimeproducts")
def realtime_products(
    request: Request,
    sort: str = Query("asc"),
    db: Session = Depends(get_db),
):
    valid_sort = sort if sort in SORT_ORDERS else "asc"
    try:
        products = ProductService(db).list_all(sort=valid_sort)
    except StorefrontError as e:
        return render_error(request, e)
    return templates.TemplateResponse(
        request, "realtime_products.html", {"products": products, "sort": valid_sort}
    )
