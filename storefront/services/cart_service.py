# storefront/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.schemas import CartEntryIn
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_entries_adapter = TypeAdapter(List[CartEntryIn])


class CartService:
    """
    Cart use cases.
    Queries (get_cart, list_carts) return carts with product references
    resolved to {id, title, price}; commands mutate the products sequence.

    A cart holds each product at most once: adding a product that is already
    in the cart bumps its quantity by one instead of appending a new entry.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query
    def get_cart(self, cart_id: str) -> Dict[str, Any]:
        cart = self._require_cart(cart_id)
        populated = self.repo.get_populated_items([cart.id])
        return self._to_dict(cart.id, populated[cart.id])

    def list_carts(self) -> List[Dict[str, Any]]:
        carts = self.repo.list_carts()
        populated = self.repo.get_populated_items([c.id for c in carts])
        return [self._to_dict(c.id, populated[c.id]) for c in carts]

    #commands
    def create_cart(self) -> Dict[str, Any]:
        created = self.repo.create_cart(CartModel())
        logger.info(f"Created cart {created.id}")
        return {"id": created.id, "products": [], "total_quantity": 0, "total_price": 0.0}

    def add_product(self, cart_id: str, product_id: str) -> Dict[str, Any]:
        self._require_cart(cart_id)
        if not self.products.get_product(product_id):
            logger.info(f"Product {product_id} not found, cannot add to cart {cart_id}")
            raise NotFoundError(f"Product {product_id} not found")

        #merge rule: existing entry gets +1, otherwise a new entry with quantity 1
        if self.repo.increment_item(cart_id, product_id, by=1):
            logger.info(f"Product {product_id} already in cart {cart_id}, quantity +1")
        else:
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart_id, product_id=product_id, quantity=1)
            )
            logger.info(f"Added product {product_id} to cart {cart_id}")
        self.repo.commit()

        return self.get_cart(cart_id)

    def update_quantity(self, cart_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("quantity must be an integer >= 1")

        self._require_cart(cart_id)

        # single conditional update keyed on (cart, product)
        rowcount = self.repo.set_item_quantity(cart_id, product_id, quantity)
        if rowcount == 0:
            self.repo.rollback()
            raise NotFoundError(f"Product {product_id} not found in cart {cart_id}")
        self.repo.commit()

        logger.info(f"Cart {cart_id}: product {product_id} quantity set to {quantity}")
        return self.get_cart(cart_id)

    def remove_item(self, cart_id: str, product_id: str) -> Dict[str, Any]:
        self._require_cart(cart_id)

        if self.repo.delete_cart_item(cart_id, product_id):
            self.repo.commit()
            logger.info(f"Removed product {product_id} from cart {cart_id}")
        else:
            logger.info(f"Product {product_id} not in cart {cart_id}, nothing to remove")

        return self.get_cart(cart_id)

    def replace_contents(self, cart_id: str, entries: Sequence[Any]) -> Dict[str, Any]:
        """
        Replaces the whole products sequence.
        Every entry is checked first (quantity >= 1, no duplicates, product
        exists); on any problem nothing is written.
        """
        try:
            parsed = _entries_adapter.validate_python(list(entries))
        except PydanticValidationError as e:
            raise ValidationError.from_pydantic(e) from e
        except TypeError as e:
            raise ValidationError("products must be a list of {product, quantity}") from e

        ids = [e.product for e in parsed]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate products in cart contents: {', '.join(duplicates)}")

        self._require_cart(cart_id)

        known = self.products.get_products_by_ids(ids)
        missing = [pid for pid in ids if pid not in known]
        if missing:
            logger.warning(f"Cart {cart_id}: replace rejected, unknown products {missing}")
            raise ValidationError(f"Unknown products: {', '.join(missing)}")

        self.repo.clear_items(cart_id)
        for entry in parsed:
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart_id, product_id=entry.product, quantity=entry.quantity)
            )
        self.repo.commit()

        logger.info(f"Cart {cart_id}: contents replaced with {len(parsed)} entries")
        return self.get_cart(cart_id)

    def empty_cart(self, cart_id: str) -> Dict[str, Any]:
        self._require_cart(cart_id)

        self.repo.clear_items(cart_id)
        self.repo.commit()

        logger.info(f"Cart {cart_id} emptied")
        return self.get_cart(cart_id)

    def _require_cart(self, cart_id: str) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            logger.info(f"Cart {cart_id} not found")
            raise NotFoundError(f"Cart {cart_id} not found")
        return cart

    @staticmethod
    def _to_dict(cart_id: str, rows) -> Dict[str, Any]:
        products = []
        for item, product in rows:
            if product is None:
                logger.warning(
                    f"Cart {cart_id}: skipping entry for deleted product {item.product_id}"
                )
                continue
            products.append(
                {
                    "id": product.id,
                    "title": product.title,
                    "price": product.price,
                    "quantity": item.quantity,
                }
            )

        return {
            "id": cart_id,
            "products": products,
            "total_quantity": sum(p["quantity"] for p in products),
            # summed in decimal so 3 x 0.1 is 0.3
            "total_price": float(
                sum((Decimal(str(p["price"])) * p["quantity"] for p in products), Decimal(0))
            ),
        }
