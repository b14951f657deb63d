from sqlalchemy import Column, Integer, String, CheckConstraint, ForeignKey, Index
from inventory_api.core.db import Base
from inventory_api.models.types import UTCDateTime


class Movement(Base):
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=True, index=True)
    # No FK: ledger rows outlive variants replaced by a product update
    variant_id = Column(Integer, nullable=True, index=True)
    type = Column(String(3), nullable=False)
    quantity = Column(Integer, nullable=False)
    user = Column(String(255), nullable=True)
    time = Column(UTCDateTime(), nullable=False)
    note = Column(String(1000), nullable=True)

    __table_args__ = (
        CheckConstraint("type IN ('IN', 'OUT')", name="ck_movement_type"),
        CheckConstraint("quantity > 0", name="ck_movement_quantity_positive"),
        Index("ix_movement_time_id", "time", "id"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<Movement id={self.id} variant_id={self.variant_id} type={self.type} qty={self.quantity}>"
