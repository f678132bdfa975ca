# backend/app/db/models/item_model.py
"""
Se encarga de definir el modelo de ítem del menú.
"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base

class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    image = Column(Text, nullable=True)

    tax_applicability = Column(Boolean, nullable=False)
    tax = Column(Float, nullable=True)

    base_amount = Column(Float, nullable=False)
    discount = Column(Float, nullable=False, default=0)
    # Derivado: se recalcula en cada escritura (ver services/item_rules.normalize_item)
    total_amount = Column(Float, nullable=False)

    # Exactamente uno de los dos padres
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="items")
    subcategory = relationship("Subcategory", back_populates="items")

    __table_args__ = (
        CheckConstraint(
            "(category_id IS NULL) <> (subcategory_id IS NULL)",
            name="ck_item_single_parent",
        ),
        CheckConstraint("discount <= base_amount", name="ck_item_discount_ceiling"),
    )
