#import every model so SQLAlchemy registers it in Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel

__all__ = ["ProductModel", "CartModel", "CartItemModel"]
