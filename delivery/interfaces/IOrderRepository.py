from abc import ABC, abstractmethod
from typing import List, Dict, Optional

from delivery.domain.enums import OrderStatus
from delivery.domain.models import Order

class IOrderRepository(ABC):
    @abstractmethod
    def create_order(self, customer_id: int, restaurant_id: int, total: int, items: List[Dict]) -> Order:
        """Write the order and all its items in one transaction.
        Each item dict holds ``dish_id``, ``options`` and ``price``."""
        pass

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    def list_customer_orders(self, customer_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        pass

    @abstractmethod
    def list_driver_orders(self, driver_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        pass

    @abstractmethod
    def list_owner_orders(self, owner_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        pass

    @abstractmethod
    def update_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        pass

    @abstractmethod
    def assign_driver(self, order_id: int, driver_id: int) -> bool:
        """Set the driver only if none is set yet. Returns False when another
        driver already holds the order."""
        pass
