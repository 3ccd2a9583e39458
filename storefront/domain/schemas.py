# storefront/domain/schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProductIn(BaseModel):
    """Fields required to add a product to the catalog."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Product title")
    description: str = Field(..., min_length=1, description="Product description")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    code: str = Field(..., min_length=1, description="Catalog code, unique across products")
    stock: int = Field(..., ge=0, description="Units in stock")
    category: str = Field(..., min_length=1, description="Product category")
    thumbnails: List[str] = Field(default_factory=list, description="Image references")


class ProductUpdate(BaseModel):
    """Partial update, only the fields that were sent are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    code: Optional[str] = Field(None, min_length=1)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    status: Optional[bool] = None
    thumbnails: Optional[List[str]] = None

    @field_validator("*")
    @classmethod
    def not_null(cls, value):
        # defaults are not validated, only an explicit null lands here
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductOut(BaseModel):
    id: str
    title: str
    description: str
    price: float
    code: str
    stock: int
    category: str
    status: bool
    thumbnails: List[str]

    model_config = ConfigDict(from_attributes=True)


class PageRef(BaseModel):
    """Coordinates of an adjacent page, formatted into a link by the presentation layer."""

    page: int
    limit: int
    sort: Optional[str] = None
    query: Optional[str] = None


class ProductPage(BaseModel):
    docs: List[ProductOut]
    total_docs: int
    limit: int
    total_pages: int
    page: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None
    prev_link: Optional[PageRef] = None
    next_link: Optional[PageRef] = None


class CartEntryIn(BaseModel):
    """One entry of a wholesale cart replacement."""

    product: str = Field(..., min_length=1, description="Referenced product id")
    quantity: int = Field(1, ge=1, description="Units of the product")


class ReplaceCartIn(BaseModel):
    products: List[CartEntryIn]


class QuantityIn(BaseModel):
    quantity: int = Field(..., ge=1, description="New quantity (must be >= 1)")


class AddToCartIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str = Field(..., min_length=1)
    cart_id: str = Field(..., min_length=1)


class CartEntryOut(BaseModel):
    """Cart entry with the referenced product resolved."""

    id: str
    title: str
    price: float
    quantity: int


class CartOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    products: List[CartEntryOut]
    total_quantity: int
    total_price: float


class MessageOut(BaseModel):
    message: str


class ProductListOut(BaseModel):
    """JSON shape of the paginated catalog endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = "success"
    payload: List[ProductOut]
    total_pages: int
    prev_page: Optional[int] = None
    next_page: Optional[int] = None
    page: int
    has_prev_page: bool
    has_next_page: bool
    prev_link: Optional[str] = None
    next_link: Optional[str] = None


class SortRequest(BaseModel):
    event: str = "sortProducts"
    sort: Optional[str] = None
