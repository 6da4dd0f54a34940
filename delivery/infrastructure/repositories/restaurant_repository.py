import logging
from typing import Dict, List, Optional

from delivery.domain.models import Dish, Order, OrderItem, Restaurant
from delivery.infrastructure.database import SessionLocal
from delivery.interfaces.IRestaurantRepository import IRestaurantRepository

logger = logging.getLogger(__name__)

class SqlRestaurantRepository(IRestaurantRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    # --- RESTAURANTS ---

    def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        session = self.session_factory()
        try:
            return session.get(Restaurant, restaurant_id)
        finally:
            session.close()

    def list_owner_restaurants(self, owner_id: int) -> List[Restaurant]:
        session = self.session_factory()
        try:
            return session.query(Restaurant).filter(Restaurant.owner_id == owner_id).order_by(Restaurant.id).all()
        finally:
            session.close()

    def create_restaurant(self, owner_id: int, name: str, address: Optional[str]) -> Restaurant:
        session = self.session_factory()
        try:
            restaurant = Restaurant(owner_id=owner_id, name=name, address=address)
            session.add(restaurant)
            session.commit()
            restaurant_id = restaurant.id
        except Exception as e:
            logger.error(f"❌ DB Error creating restaurant: {e}")
            session.rollback()
            raise
        finally:
            session.close()
        return self.get_restaurant(restaurant_id)

    def update_restaurant(self, restaurant_id: int, changes: Dict) -> Optional[Restaurant]:
        return self._update(Restaurant, restaurant_id, changes, self.get_restaurant)

    def delete_restaurant(self, restaurant_id: int) -> bool:
        session = self.session_factory()
        try:
            restaurant = session.get(Restaurant, restaurant_id)
            if restaurant is None:
                return False
            dish_ids = [dish.id for dish in restaurant.dishes]
            # Same as ON DELETE SET NULL, also on backends that do not enforce it.
            session.query(Order).filter(Order.restaurant_id == restaurant_id).update(
                {Order.restaurant_id: None}, synchronize_session=False
            )
            if dish_ids:
                session.query(OrderItem).filter(OrderItem.dish_id.in_(dish_ids)).update(
                    {OrderItem.dish_id: None}, synchronize_session=False
                )
            session.delete(restaurant)  # cascades to the menu
            session.commit()
            return True
        except Exception as e:
            logger.error(f"❌ DB Error deleting restaurant {restaurant_id}: {e}")
            session.rollback()
            raise
        finally:
            session.close()

    # --- DISHES ---

    def get_dish(self, dish_id: int, restaurant_id: int) -> Optional[Dish]:
        session = self.session_factory()
        try:
            return (
                session.query(Dish)
                .filter(Dish.id == dish_id, Dish.restaurant_id == restaurant_id)
                .one_or_none()
            )
        finally:
            session.close()

    def find_dish(self, dish_id: int) -> Optional[Dish]:
        session = self.session_factory()
        try:
            return session.get(Dish, dish_id)
        finally:
            session.close()

    def list_dishes(self, restaurant_id: int) -> List[Dish]:
        session = self.session_factory()
        try:
            return session.query(Dish).filter(Dish.restaurant_id == restaurant_id).order_by(Dish.id).all()
        finally:
            session.close()

    def create_dish(self, restaurant_id: int, fields: Dict) -> Dish:
        session = self.session_factory()
        try:
            dish = Dish(restaurant_id=restaurant_id, **fields)
            session.add(dish)
            session.commit()
            dish_id = dish.id
        except Exception as e:
            logger.error(f"❌ DB Error creating dish: {e}")
            session.rollback()
            raise
        finally:
            session.close()
        return self.find_dish(dish_id)

    def update_dish(self, dish_id: int, changes: Dict) -> Optional[Dish]:
        return self._update(Dish, dish_id, changes, self.find_dish)

    def delete_dish(self, dish_id: int) -> bool:
        session = self.session_factory()
        try:
            session.query(OrderItem).filter(OrderItem.dish_id == dish_id).update(
                {OrderItem.dish_id: None}, synchronize_session=False
            )
            deleted = session.query(Dish).filter(Dish.id == dish_id).delete(synchronize_session=False)
            session.commit()
            return deleted == 1
        except Exception as e:
            logger.error(f"❌ DB Error deleting dish {dish_id}: {e}")
            session.rollback()
            raise
        finally:
            session.close()

    def _update(self, model, record_id: int, changes: Dict, reload):
        session = self.session_factory()
        try:
            updated = (
                session.query(model)
                .filter(model.id == record_id)
                .update(changes, synchronize_session=False)
            )
            session.commit()
        except Exception as e:
            logger.error(f"❌ DB Error updating {model.__tablename__} {record_id}: {e}")
            session.rollback()
            raise
        finally:
            session.close()
        return reload(record_id) if updated else None
