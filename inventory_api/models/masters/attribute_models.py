from sqlalchemy import Column, Integer, String, CheckConstraint, UniqueConstraint
from inventory_api.core.db import Base


class Attribute(Base):
    __tablename__ = "attributes"

    id = Column(Integer, primary_key=True)
    type = Column(String(20), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color_code = Column(String(32), nullable=True)
    status = Column(Integer, nullable=False, default=1, server_default="1")

    __table_args__ = (
        UniqueConstraint("type", "name", name="uq_attribute_type_name"),
        CheckConstraint("type IN ('color', 'size', 'category')", name="ck_attribute_type"),
        CheckConstraint("status IN (0, 1)", name="ck_attribute_status"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<Attribute id={self.id} type={self.type} name={self.name} status={self.status}>"
