# storefront/services/product_service.py
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import PageRef, ProductIn, ProductOut, ProductPage, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.utils.settings import PRODUCTS_PAGE_LIMIT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SORT_ORDERS = ("asc", "desc")


class ProductService:
    """
    Catalog use cases.
    Commands (add, update, remove) validate input and persist,
    queries (get, list_products, list_all) only read.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    #query
    def get_product(self, product_id: str) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            logger.info(f"Product {product_id} not found")
            raise NotFoundError(f"Product {product_id} not found")
        return ProductOut.model_validate(product)

    def list_products(
        self,
        limit: int = PRODUCTS_PAGE_LIMIT,
        page: int = 1,
        sort: str | None = None,
        query: str | None = None,
    ) -> ProductPage:
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        if page < 1:
            raise ValidationError("page must be at least 1")

        skip = (page - 1) * limit
        docs, total = self.repo.find_page(
            query=query,
            sort=sort if sort in SORT_ORDERS else None,
            skip=skip,
            limit=limit,
        )

        total_pages = -(-total // limit)
        has_prev = page > 1
        has_next = page < total_pages

        #links echo the same limit/sort/query
        def ref(target: int) -> PageRef:
            return PageRef(page=target, limit=limit, sort=sort, query=query)

        return ProductPage(
            docs=[ProductOut.model_validate(p) for p in docs],
            total_docs=total,
            limit=limit,
            total_pages=total_pages,
            page=page,
            has_prev_page=has_prev,
            has_next_page=has_next,
            prev_page=page - 1 if has_prev else None,
            next_page=page + 1 if has_next else None,
            prev_link=ref(page - 1) if has_prev else None,
            next_link=ref(page + 1) if has_next else None,
        )

    def list_all(self, sort: str | None = None) -> List[ProductOut]:
        """Whole catalog, unpaginated, sorted in memory by price."""
        products = [ProductOut.model_validate(p) for p in self.repo.list_all()]
        if sort in SORT_ORDERS:
            # sorted() is stable, equal prices keep the natural order
            products = sorted(products, key=lambda p: p.price, reverse=(sort == "desc"))
        return products

    #commands
    def add_product(self, fields: Dict[str, Any]) -> ProductOut:
        try:
            data = ProductIn.model_validate(fields)
        except PydanticValidationError as e:
            logger.warning(f"Rejected new product: {e.error_count()} invalid field(s)")
            raise ValidationError.from_pydantic(e) from e

        product = ProductModel(
            title=data.title,
            description=data.description,
            price=data.price,
            code=data.code,
            stock=data.stock,
            category=data.category,
            status=True,
            thumbnails=list(data.thumbnails),
        )
        created = self.repo.create_product(product)

        logger.info(f"Product {created.id} added with code {created.code}")
        return ProductOut.model_validate(created)

    def update_product(self, product_id: str, fields: Dict[str, Any]) -> ProductOut:
        try:
            changes = ProductUpdate.model_validate(fields).model_dump(exclude_unset=True)
        except PydanticValidationError as e:
            logger.warning(f"Rejected update of product {product_id}")
            raise ValidationError.from_pydantic(e) from e

        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")

        updated = self.repo.update_product(product, changes)

        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return ProductOut.model_validate(updated)

    def delete_product(self, product_id: str) -> None:
        if not self.repo.delete_product(product_id):
            raise NotFoundError(f"Product {product_id} not found")

        # cart entries pointing at it are left dangling
        logger.info(f"Product {product_id} deleted")
