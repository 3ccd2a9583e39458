#storefront/data/models/cart.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models.product import new_id


class CartModel(Base):
    __tablename__ = "carts"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), nullable=False, unique=True, default=new_id)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
