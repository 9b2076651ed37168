from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.model.order import OrderDB
from db.model.order_item import OrderItemDB
from db.schema.order import OrderSave
from db.schema.order_item import OrderItemSave


class DuplicateOrderError(Exception):
    external_order_id: str

    def __init__(self, external_order_id: str):
        super().__init__(f"Order '{external_order_id}' already exists")
        self.external_order_id = external_order_id


class OrderCRUD:

    _db: Session

    def __init__(self, db: Session):
        self._db = db

    def get(self, order_id: int) -> OrderDB | None:
        return self._db.query(OrderDB).filter(OrderDB.id == order_id).first()

    def get_by_external_id(self, external_order_id: str) -> OrderDB | None:
        return self._db.query(OrderDB).filter(OrderDB.external_order_id == external_order_id).first()

    def exists(self, external_order_id: str) -> bool:
        return self._db.query(OrderDB.id).filter(OrderDB.external_order_id == external_order_id).first() is not None

    def create_with_items(self, create_data: OrderSave, items: list[OrderItemSave]) -> OrderDB:
        order = OrderDB(**create_data.model_dump())
        try:
            self._db.add(order)
            self._db.flush()  # assigns the ID and trips the unique constraint early
            for item in items:
                self._db.add(OrderItemDB(order_id = order.id, **item.model_dump()))
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            if self.exists(create_data.external_order_id):
                raise DuplicateOrderError(create_data.external_order_id) from e
            raise
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(order)
        return order

    def mark_fulfilled(self, order_id: int) -> OrderDB | None:
        order = self.get(order_id)
        if order and not order.fulfilled:
            order.fulfilled = True
            self._db.commit()
            self._db.refresh(order)
        return order

    def update_status(self, order_id: int, status: OrderDB.Status) -> OrderDB | None:
        order = self.get(order_id)
        if order:
            order.status = status
            self._db.commit()
            self._db.refresh(order)
        return order
