from sqlalchemy import Column, Integer, Float

from productdb.db.base import Base


class Nutrients(Base):
    """Nutrition facts for a reference quantity of 100 g (or 100 ml)."""

    __tablename__ = "nutrients"

    id = Column(Integer, primary_key=True, index=True)

    kcal = Column(Float, nullable=False)

    protein_grams = Column(Float, nullable=True)
    fat_grams = Column(Float, nullable=True)
    carbohydrates_grams = Column(Float, nullable=True)
    sugar_grams = Column(Float, nullable=True)
    salt_grams = Column(Float, nullable=True)

    vitamin_a_mg = Column(Float, nullable=True)
    vitamin_c_mg = Column(Float, nullable=True)
    vitamin_d_mug = Column(Float, nullable=True)  # micrograms
    iron_mg = Column(Float, nullable=True)
    calcium_mg = Column(Float, nullable=True)
    magnesium_mg = Column(Float, nullable=True)
    sodium_mg = Column(Float, nullable=True)
    zinc_mg = Column(Float, nullable=True)
