# storefront/data/models/product.py
import uuid

from sqlalchemy import Column, String, Text, Float, Integer, Boolean, JSON

from storefront.data.database import Base


def new_id() -> str:
    return uuid.uuid4().hex


class ProductModel(Base):
    __tablename__ = "products"

    #surrogate key, its order is the natural (insertion) order of the catalog
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), nullable=False, unique=True, default=new_id)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    #unique constraint instead of a lookup before insert
    code = Column(String, nullable=False, unique=True)
    stock = Column(Integer, nullable=False)
    category = Column(String, nullable=False, index=True)

    status = Column(Boolean, nullable=False, default=True)
    thumbnails = Column(JSON, nullable=False, default=list)
