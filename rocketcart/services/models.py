"""Shop API models - Pydantic schemas for stock and product responses."""
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from rocketcart.services.money import to_decimal as _to_decimal


class Stock(BaseModel):
    """Available quantity of a product."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    amount: int = Field(ge=0)


class Product(BaseModel):
    """Product metadata. The storefront API names fields title/image."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    price: Decimal
    image_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl", "image")
    )

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)
