# backend/app/db/models/subcategory_model.py
"""
Se encarga de definir el modelo de subcategoría del menú.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base

class Subcategory(Base):
    __tablename__ = "subcategories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    image = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # NULL significa "heredar de la categoría padre"
    tax_applicability = Column(Boolean, nullable=True)
    tax = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="subcategories")
    items = relationship("Item", back_populates="subcategory")

    __table_args__ = (
        Index("ix_subcategories_category_name", "category_id", "name"),
    )
