import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Enum, Index
from glowtrack.core.database import Base


class ProductCategory(str, enum.Enum):
    EYES = "eyes"
    LIPS = "lips"
    FACE = "face"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, default="")
    category = Column(
        Enum(
            ProductCategory,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        default=ProductCategory.LIPS,
        index=True,
    )

    # fixé à la création, jamais modifié ensuite
    date_added = Column(DateTime, nullable=False, default=_utcnow, index=True)

    pao_months = Column(Integer, nullable=True)
    expiry_date = Column(DateTime, nullable=True)

    __table_args__ = (Index("ix_products_category_added", "category", "date_added"),)

    @property
    def display_name(self) -> str:
        if self.name and self.name.strip():
            return self.name
        category = ProductCategory(self.category or ProductCategory.LIPS)
        return f"{category.label} Item"

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, category={self.category})>"
