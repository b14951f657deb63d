from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from inventory_api.core.db import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Stable external identifier; never changes after creation
    code = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    cost = Column(Integer, nullable=True)
    note = Column(String(1000), nullable=True)
    category = Column(String(255), nullable=True)

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self):
        return f"<Product id={self.id} code={self.code} name={self.name}>"


class ProductVariant(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    color = Column(String(255), nullable=True)
    size = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=False, default=0, server_default="0")
    img = Column(String(1000), nullable=True)

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_variant_quantity_non_negative"),
        # Replaced variants must never hand their ids to new rows
        {"sqlite_autoincrement": True},
    )

    @property
    def label(self) -> str:
        return variant_label(self.color, self.size)

    def __repr__(self):
        return f"<ProductVariant id={self.id} product_id={self.product_id} qty={self.quantity}>"


def variant_label(color: str | None, size: str | None) -> str:
    """'<color> / <size>', either side optional, '' when both are missing."""
    return " / ".join(part for part in (color, size) if part)
