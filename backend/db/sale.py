from sqlalchemy import Column, Float, Integer, String

from .database import Base


class Sale(Base):
    """Append-only sale log. item_id is not a foreign key: inventory may be re-uploaded after sales."""
    __tablename__ = "sales"

    sale_id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    cost = Column(Float, nullable=True)
    timestamp = Column(String, nullable=False)

    @property
    def to_schema(self):
        return {
            "sale_id": self.sale_id,
            "item_id": self.item_id,
            "name": self.name,
            "price": self.price,
            "cost": self.cost,
            "timestamp": self.timestamp,
        }
