import base64
import binascii
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from productdb.models.product_description import QuantityType


class Weight(BaseModel):
    """A weight expressed in gram."""
    value: float

    model_config = ConfigDict(allow_inf_nan=False)

    @classmethod
    def from_milligram(cls, milligram: float) -> "Weight":
        return cls(value=milligram / 1e3)

    @classmethod
    def from_microgram(cls, microgram: float) -> "Weight":
        return cls(value=microgram / 1e6)

    @property
    def gram(self) -> float:
        return self.value

    @property
    def milligram(self) -> float:
        return self.value * 1e3

    @property
    def microgram(self) -> float:
        return self.value * 1e6


class Nutrients(BaseModel):
    """Nutrients for a reference quantity of 100 g (or 100 ml)."""
    # checked by the entity store, so a missing value is a catalog ValidationError
    kcal: Optional[float] = None
    protein: Optional[Weight] = None
    fat: Optional[Weight] = None
    carbohydrates: Optional[Weight] = None
    sugar: Optional[Weight] = None
    salt: Optional[Weight] = None
    vitamin_a: Optional[Weight] = Field(default=None, alias="vitaminA")
    vitamin_c: Optional[Weight] = Field(default=None, alias="vitaminC")
    vitamin_d: Optional[Weight] = Field(default=None, alias="vitaminD")
    iron: Optional[Weight] = None
    calcium: Optional[Weight] = None
    magnesium: Optional[Weight] = None
    sodium: Optional[Weight] = None
    zinc: Optional[Weight] = None

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class ProductImage(BaseModel):
    """Image payload; base64 encoded in JSON, raw bytes in Python."""
    content_type: str = Field(alias="contentType", min_length=1, max_length=32)
    data: bytes

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("data", mode="before")
    @classmethod
    def decode_base64(cls, value):
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError):
                raise ValueError("image data is not valid base64")
        return value

    @field_serializer("data", when_used="json")
    def encode_base64(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class ProductInfo(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=64)
    producer: Optional[str] = Field(default=None, max_length=64)
    quantity_type: QuantityType
    # grams or millilitres, depending on quantity_type
    portion: float
    volume_weight_ratio: Optional[float] = None

    model_config = ConfigDict(allow_inf_nan=False)


class ProductDescription(BaseModel):
    info: ProductInfo
    preview: Optional[ProductImage] = None
    full_image: Optional[ProductImage] = None
    nutrients: Nutrients
