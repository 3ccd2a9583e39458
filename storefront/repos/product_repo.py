# storefront/repos/product_repo.py
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.data.database import store_guard
from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        with store_guard(self.db, "get product"):
            return self.db.execute(
                select(ProductModel).where(ProductModel.id == product_id)
            ).scalar_one_or_none()

    def get_products_by_ids(self, product_ids: Sequence[str]) -> Dict[str, ProductModel]:
        if not product_ids:
            return {}
        with store_guard(self.db, "resolve products"):
            rows = self.db.execute(
                select(ProductModel).where(ProductModel.id.in_(product_ids))
            ).scalars()
            return {p.id: p for p in rows}

    def create_product(self, product: ProductModel) -> ProductModel:
        with store_guard(
            self.db,
            "create product",
            conflict=f"Product code '{product.code}' already exists",
        ):
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
            return product

    def update_product(self, product: ProductModel, data: Dict[str, Any]) -> ProductModel:
        conflict = f"Product code '{data['code']}' already exists" if "code" in data else None
        with store_guard(self.db, "update product", conflict=conflict):
            for field, value in data.items():
                setattr(product, field, value)
            self.db.commit()
            self.db.refresh(product)
            return product

    def delete_product(self, product_id: str) -> bool:
        with store_guard(self.db, "delete product"):
            product = self.db.execute(
                select(ProductModel).where(ProductModel.id == product_id)
            ).scalar_one_or_none()
            if product is None:
                return False
            self.db.delete(product)
            self.db.commit()
            return True

    def find_page(
        self,
        query: str | None,
        sort: str | None,
        skip: int,
        limit: int,
    ) -> Tuple[List[ProductModel], int]:
        """Returns one page of matching products and the total number of matches."""
        conditions = []
        if query:
            # category substring (case-insensitive) OR availability flag
            conditions.append(
                or_(
                    ProductModel.category.icontains(query, autoescape=True),
                    ProductModel.status == (query.lower() == "available"),
                )
            )

        stmt = select(ProductModel).where(*conditions)
        if sort == "asc":
            stmt = stmt.order_by(ProductModel.price.asc())
        elif sort == "desc":
            stmt = stmt.order_by(ProductModel.price.desc())
        stmt = stmt.order_by(ProductModel.pk)

        count_stmt = select(func.count()).select_from(ProductModel).where(*conditions)

        with store_guard(self.db, "list products"):
            total = self.db.execute(count_stmt).scalar_one()
            # past the last match nothing is fetched; offset/limit stay within the driver's integer range
            if skip >= total:
                return [], total
            stmt = stmt.offset(skip).limit(min(limit, total - skip))
            docs = list(self.db.execute(stmt).scalars())
        return docs, total

    def list_all(self) -> List[ProductModel]:
        with store_guard(self.db, "list products"):
            stmt = select(ProductModel).order_by(ProductModel.pk)
            return list(self.db.execute(stmt).scalars())

    def count(self) -> int:
        with store_guard(self.db, "count products"):
            return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()
