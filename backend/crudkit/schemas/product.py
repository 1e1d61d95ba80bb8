"""Product Schemas: create, partial update, list filter and view.

Invariants:
    - ProductCreate.name / sku stripped and non-empty; price >= 0
    - ProductUpdate fields are all optional; unset fields are left untouched
    - ProductFilter.min_price <= max_price when both are given
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("value cannot be empty or whitespace")
    return v


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    sku: str = Field(min_length=1, max_length=64)
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    description: str | None = Field(None, max_length=5000)

    @field_validator("name", "sku")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    sku: str | None = Field(None, min_length=1, max_length=64)
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = Field(None, max_length=5000)

    @field_validator("name", "sku")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return None if v is None else _strip_required(v)


class ProductFilter(BaseModel):
    """List constraints taken from query parameters."""
    name: str | None = None
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_price_range(self):
        if (
            self.min_price is not None and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValueError("min_price must not exceed max_price")
        return self


class ProductView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    sku: str
    price: Decimal
    description: str | None = None
    created_at: datetime
    updated_at: datetime
