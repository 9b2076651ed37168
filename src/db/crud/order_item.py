from sqlalchemy.orm import Session

from db.model.order_item import OrderItemDB


class OrderItemCRUD:

    _db: Session

    def __init__(self, db: Session):
        self._db = db

    def get(self, item_id: int) -> OrderItemDB | None:
        return self._db.query(OrderItemDB).filter(OrderItemDB.id == item_id).first()

    def get_all_by_order(self, order_id: int) -> list[OrderItemDB]:
        # positional order is part of the download links, so it must stay stable
        # noinspection PyTypeChecker
        return self._db.query(OrderItemDB).filter(
            OrderItemDB.order_id == order_id,
        ).order_by(OrderItemDB.id).all()
