# storefront/repos/cart_repo.py
from typing import Dict, List, Sequence, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from storefront.data.database import store_guard
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_cart(self, cart: CartModel) -> CartModel:
        with store_guard(self.db, "create cart"):
            self.db.add(cart)
            self.db.commit()
            self.db.refresh(cart)
            return cart

    def get_cart(self, cart_id: str) -> CartModel | None:
        with store_guard(self.db, "get cart"):
            return self.db.execute(
                select(CartModel).where(CartModel.id == cart_id)
            ).scalar_one_or_none()

    def list_carts(self) -> List[CartModel]:
        with store_guard(self.db, "list carts"):
            return list(self.db.execute(select(CartModel).order_by(CartModel.pk)).scalars())

    def get_populated_items(
        self, cart_ids: Sequence[str]
    ) -> Dict[str, List[Tuple[CartItemModel, ProductModel | None]]]:
        """
        Populate: joins every entry of the given carts to its product.
        Entries whose product no longer exists come back paired with None.
        """
        result: Dict[str, List[Tuple[CartItemModel, ProductModel | None]]] = {
            cid: [] for cid in cart_ids
        }
        if not cart_ids:
            return result

        stmt = (
            select(CartItemModel, ProductModel)
            .outerjoin(ProductModel, ProductModel.id == CartItemModel.product_id)
            .where(CartItemModel.cart_id.in_(cart_ids))
            .order_by(CartItemModel.cart_id, CartItemModel.id)
        )
        with store_guard(self.db, "populate cart items"):
            for item, product in self.db.execute(stmt).all():
                result[item.cart_id].append((item, product))
        return result

    def increment_item(self, cart_id: str, product_id: str, by: int = 1) -> int:
        # update cart_items set quantity = quantity + 1 where cart_id = .. and product_id = ..
        stmt = (
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=CartItemModel.quantity + by)
        )
        with store_guard(self.db, "increment cart item"):
            return self.db.execute(stmt).rowcount

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        with store_guard(
            self.db,
            "add cart item",
            conflict=f"Product {item.product_id} is already in cart {item.cart_id}",
        ):
            self.db.add(item)
            self.db.flush()
            return item

    def set_item_quantity(self, cart_id: str, product_id: str, quantity: int) -> int:
        stmt = (
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
        )
        with store_guard(self.db, "update cart item quantity"):
            return self.db.execute(stmt).rowcount

    def delete_cart_item(self, cart_id: str, product_id: str) -> int:
        stmt = delete(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        with store_guard(self.db, "delete cart item"):
            return self.db.execute(stmt).rowcount

    def clear_items(self, cart_id: str) -> int:
        stmt = delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        with store_guard(self.db, "clear cart items"):
            return self.db.execute(stmt).rowcount

    def commit(self):
        with store_guard(self.db, "commit"):
            self.db.commit()

    def rollback(self):
        self.db.rollback()
