import logging
from typing import Dict, List, Optional

from sqlalchemy import desc, select

from delivery.domain.enums import OrderStatus
from delivery.domain.models import Order, OrderItem, Restaurant
from delivery.infrastructure.database import SessionLocal
from delivery.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)

class SqlOrderRepository(IOrderRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_order(self, customer_id: int, restaurant_id: int, total: int, items: List[Dict]) -> Order:
        session = self.session_factory()
        try:
            new_order = Order(
                customer_id=customer_id,
                restaurant_id=restaurant_id,
                total=total,
                status=OrderStatus.PENDING,
            )
            new_order.items = [
                OrderItem(dish_id=item["dish_id"], options=item["options"], price=item["price"])
                for item in items
            ]
            session.add(new_order)
            session.commit()
            order_id = new_order.id
        except Exception as e:
            logger.error(f"❌ DB Error creating order: {e}")
            session.rollback()
            raise
        finally:
            session.close()
        return self.get_order(order_id)

    def get_order(self, order_id: int) -> Optional[Order]:
        session = self.session_factory()
        try:
            return session.query(Order).filter(Order.id == order_id).one_or_none()
        finally:
            session.close()

    def list_customer_orders(self, customer_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        return self._list(Order.customer_id == customer_id, status=status)

    def list_driver_orders(self, driver_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        return self._list(Order.driver_id == driver_id, status=status)

    def list_owner_orders(self, owner_id: int, status: Optional[OrderStatus] = None) -> List[Order]:
        owned = Order.restaurant_id.in_(select(Restaurant.id).where(Restaurant.owner_id == owner_id))
        return self._list(owned, status=status)

    def update_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        session = self.session_factory()
        try:
            updated = (
                session.query(Order)
                .filter(Order.id == order_id)
                .update({Order.status: status}, synchronize_session=False)
            )
            session.commit()
        except Exception as e:
            logger.error(f"❌ DB Error updating order {order_id}: {e}")
            session.rollback()
            raise
        finally:
            session.close()
        return self.get_order(order_id) if updated else None

    def assign_driver(self, order_id: int, driver_id: int) -> bool:
        # Single conditional UPDATE: of two racing drivers only one row update can match.
        session = self.session_factory()
        try:
            updated = (
                session.query(Order)
                .filter(Order.id == order_id, Order.driver_id.is_(None))
                .update({Order.driver_id: driver_id}, synchronize_session=False)
            )
            session.commit()
            return updated == 1
        except Exception as e:
            logger.error(f"❌ DB Error assigning driver to order {order_id}: {e}")
            session.rollback()
            raise
        finally:
            session.close()

    def _list(self, scope, status: Optional[OrderStatus] = None) -> List[Order]:
        """
        Orders matching ``scope``, optionally with exactly ``status``.
        Newest first.
        """
        session = self.session_factory()
        try:
            query = session.query(Order).filter(scope)
            if status is not None:
                query = query.filter(Order.status == status)
            return query.order_by(desc(Order.created_at), desc(Order.id)).all()
        finally:
            session.close()
