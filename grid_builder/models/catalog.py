"""Catalog models: products and alignment templates."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Alignment(str, Enum):
    """Row alignment options."""

    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"


class Price(BaseModel):
    """Price of a product in a given currency."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Price amount")
    currency: str = Field(..., min_length=3, max_length=3, description="ISO currency code (e.g., 'EUR')")

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        """Keep amounts numeric on the wire."""
        return float(amount)


class Product(BaseModel):
    """A store product. Immutable once fetched."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique product identifier")
    name: str = Field(..., description="Display name")
    image: str = Field(..., description="Image URL")
    price: Price


class Template(BaseModel):
    """Alignment template a saved row references by id."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    alignment: Alignment
