# backend/app/db/models/category_model.py
"""
Se encarga de definir el modelo de categoría del menú.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    image = Column(Text, nullable=True)

    # tax solo tiene valor cuando tax_applicability es verdadero
    tax_applicability = Column(Boolean, nullable=False, default=False)
    tax = Column(Float, nullable=True)
    tax_type = Column(String(20), nullable=False, default="percentage")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    subcategories = relationship("Subcategory", back_populates="category")
    items = relationship("Item", back_populates="category")
