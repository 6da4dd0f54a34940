from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from delivery.domain.models import Dish, Restaurant

class IRestaurantRepository(ABC):
    @abstractmethod
    def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        pass

    @abstractmethod
    def list_owner_restaurants(self, owner_id: int) -> List[Restaurant]:
        pass

    @abstractmethod
    def create_restaurant(self, owner_id: int, name: str, address: Optional[str]) -> Restaurant:
        pass

    @abstractmethod
    def update_restaurant(self, restaurant_id: int, changes: Dict) -> Optional[Restaurant]:
        pass

    @abstractmethod
    def delete_restaurant(self, restaurant_id: int) -> bool:
        """Removes the restaurant and its menu. Past orders stay, detached."""
        pass

    @abstractmethod
    def get_dish(self, dish_id: int, restaurant_id: int) -> Optional[Dish]:
        """Dish ``dish_id`` if it is on the menu of ``restaurant_id``."""
        pass

    @abstractmethod
    def find_dish(self, dish_id: int) -> Optional[Dish]:
        """Dish with its restaurant loaded, whatever the menu."""
        pass

    @abstractmethod
    def list_dishes(self, restaurant_id: int) -> List[Dish]:
        pass

    @abstractmethod
    def create_dish(self, restaurant_id: int, fields: Dict) -> Dish:
        """``fields`` holds name, price, description and options (list of dicts)."""
        pass

    @abstractmethod
    def update_dish(self, dish_id: int, changes: Dict) -> Optional[Dish]:
        pass

    @abstractmethod
    def delete_dish(self, dish_id: int) -> bool:
        pass
