"""Product payloads exchanged with the catalog."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Product(BaseModel):
    """One catalog item as last reported by the remote service.

    Fields the service echoes beyond the ones below (brand, rating, images)
    are kept so a merge never drops them.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    title: str
    price: float = 0
    category: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    stock: int = 0

    @field_validator("stock", mode="before")
    @classmethod
    def missing_stock_is_zero(cls, value):
        return 0 if value is None else value


def _check_title(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("title must not be empty")
    return value


class ProductDraft(BaseModel):
    """Payload for a new product; the catalog assigns the id."""

    model_config = ConfigDict(extra="forbid")

    title: str
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str = ""
    description: str = ""
    thumbnail: str = ""
    stock: int = Field(default=0, ge=0)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _check_title(value)


class ProductPatch(BaseModel):
    """Partial update; only fields that were set are sent."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _check_title(value)

    @model_validator(mode="after")
    def set_fields_not_null(self):
        # a field left out is fine, a field sent as null is not
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields must not be null: {', '.join(nulls)}")
        return self

    def payload(self) -> dict:
        return self.model_dump(exclude_unset=True)
