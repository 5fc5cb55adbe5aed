from sqlalchemy import Column, Float, Integer, String

from ..database import Base

DEFAULT_CATEGORY = "Uncategorized"


class InventoryItem(Base):
    __tablename__ = "inventory"

    # ids come from the uploaded sheet or are generated uuid4 strings
    id = Column(String, primary_key=True)

    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)
    price = Column(Float, nullable=False, default=0.0)
    cost = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category or DEFAULT_CATEGORY,
            "price": self.price,
            "cost": self.cost,
            "quantity": self.quantity,
        }
