from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKeyConstraint, Index, Integer, String
from sqlalchemy import Enum as EnumSQL
from sqlalchemy.sql import func

from db.model.base import BaseModel


class OrderItemDB(BaseModel):
    __tablename__ = "order_items"

    class ItemType(Enum):
        product = "product"
        bundle = "bundle"

        @classmethod
        def lookup(cls, value) -> "OrderItemDB.ItemType | None":
            try:
                return cls(value)
            except ValueError:
                return None

    id = Column(Integer, primary_key = True, autoincrement = True)
    order_id = Column(Integer, nullable = False)
    item_type = Column(EnumSQL(ItemType), nullable = False)
    source_id = Column(String, nullable = False)
    title = Column(String, nullable = False)
    price = Column(Integer, nullable = False)
    creator_id = Column(String, nullable = True)
    file_key = Column(String, nullable = True)
    max_downloads = Column(Integer, nullable = False)
    downloads_used = Column(Integer, nullable = False, default = 0)
    created_at = Column(DateTime, default = func.now(), nullable = False)

    __table_args__ = (
        ForeignKeyConstraint([order_id], ["orders.id"], name = "order_items_order_id_fkey", ondelete = "CASCADE"),
        Index("idx_order_items_order_id", order_id),
        Index("idx_order_items_creator_id", creator_id),
    )
