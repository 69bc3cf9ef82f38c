"""
Conversion between the ORM rows of a product description and the
pydantic representation used by the API.

Nutrient weights are exchanged in gram, but stored in the unit of the
column (gram, milligram or microgram). Scaled values are rounded to
SIGNIFICANT_DIGITS, so a weight with no more digits than that reads back
as the same float.
"""
from datetime import datetime, timezone
from typing import Optional

from productdb import models
from productdb.schemas.product import (
    Nutrients,
    ProductDescription,
    ProductInfo,
    Weight,
)
from productdb.services import images

# (schema field, column, unit)
NUTRIENT_COLUMNS = (
    ("protein", "protein_grams", "g"),
    ("fat", "fat_grams", "g"),
    ("carbohydrates", "carbohydrates_grams", "g"),
    ("sugar", "sugar_grams", "g"),
    ("salt", "salt_grams", "g"),
    ("vitamin_a", "vitamin_a_mg", "mg"),
    ("vitamin_c", "vitamin_c_mg", "mg"),
    ("vitamin_d", "vitamin_d_mug", "ug"),
    ("iron", "iron_mg", "mg"),
    ("calcium", "calcium_mg", "mg"),
    ("magnesium", "magnesium_mg", "mg"),
    ("sodium", "sodium_mg", "mg"),
    ("zinc", "zinc_mg", "mg"),
)


# column units per gram
UNITS_PER_GRAM = {"g": 1, "mg": 1e3, "ug": 1e6}
SIGNIFICANT_DIGITS = 12


def _rounded(value: float) -> float:
    return float(f"{value:.{SIGNIFICANT_DIGITS}g}")


def _to_unit(weight: Optional[Weight], unit: str) -> Optional[float]:
    if weight is None:
        return None
    if unit == "g":
        return weight.gram
    return _rounded(weight.gram * UNITS_PER_GRAM[unit])


def _from_unit(value: Optional[float], unit: str) -> Optional[Weight]:
    if value is None:
        return None
    if unit == "g":
        return Weight(value=value)
    return Weight(value=_rounded(value / UNITS_PER_GRAM[unit]))


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def nutrients_row(nutrients: Nutrients) -> models.Nutrients:
    row = models.Nutrients(kcal=nutrients.kcal)
    for field, column, unit in NUTRIENT_COLUMNS:
        setattr(row, column, _to_unit(getattr(nutrients, field), unit))
    return row


def nutrients_from_row(row: models.Nutrients) -> Nutrients:
    fields = {"kcal": row.kcal}
    for field, column, unit in NUTRIENT_COLUMNS:
        fields[field] = _from_unit(getattr(row, column), unit)
    return Nutrients(**fields)


def description_from_row(
    row: models.ProductDescription,
    with_preview: bool = False,
    with_full_image: bool = False,
) -> ProductDescription:
    fields = {
        "info": ProductInfo(
            id=row.product_id,
            name=row.name,
            producer=row.producer,
            quantity_type=row.quantity_type,
            portion=row.portion,
            volume_weight_ratio=row.volume_weight_ratio,
        ),
        "nutrients": nutrients_from_row(row.nutrients),
    }
    fields.update(images.image_fields(row, with_preview, with_full_image))
    return ProductDescription(**fields)
