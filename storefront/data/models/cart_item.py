from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    #autoincrement id keeps the insertion order of entries
    id = Column(Integer, primary_key=True, autoincrement=True)
    cart_id = Column(String(32), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    # weak reference, no FK: the product may be deleted while the entry stays
    product_id = Column(String(32), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="u_cart_product"),)
