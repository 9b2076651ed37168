from sqlalchemy.orm import Session

from db.crud.analytics_event import AnalyticsEventCRUD
from db.crud.order import OrderCRUD
from db.crud.order_item import OrderItemCRUD
from db.sql import initialize_db


class SQLUtil:
    __session: Session
    __is_session_active: bool

    def __init__(self):
        self.__is_session_active = False
        self.start_session()
        self.__is_session_active = True

    def start_session(self) -> Session:
        # noinspection PyPep8Naming
        engine, LocalSession = initialize_db("sqlite:///:memory:", multi_connection_setup = False)

        if self.__is_session_active:
            self.end_session()

        self.__session = LocalSession()
        self.__is_session_active = True

        return self.__session

    def get_session(self):
        return self.__session

    def end_session(self):
        self.__session.close()
        self.__is_session_active = False

    def order_crud(self) -> OrderCRUD:
        if not self.__is_session_active:
            self.start_session()
        return OrderCRUD(self.__session)

    def order_item_crud(self) -> OrderItemCRUD:
        if not self.__is_session_active:
            self.start_session()
        return OrderItemCRUD(self.__session)

    def analytics_event_crud(self) -> AnalyticsEventCRUD:
        if not self.__is_session_active:
            self.start_session()
        return AnalyticsEventCRUD(self.__session)
