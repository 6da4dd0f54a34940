import logging
from typing import List, Optional

from delivery.domain.enums import ErrorKind, UserRole
from delivery.domain.schemas import (
    CoreOutput,
    CreateDishInput,
    CreateDishOutput,
    CreateRestaurantInput,
    CreateRestaurantOutput,
    DishOption,
    DishRead,
    EditDishInput,
    EditRestaurantInput,
    MyRestaurantsOutput,
    RestaurantOutput,
    RestaurantRead,
)
from delivery.interfaces.IRestaurantRepository import IRestaurantRepository

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized"
RESTAURANT_NOT_FOUND = "Restaurant not found"
DISH_NOT_FOUND = "Dish not found"


def _fail(output_cls, kind: ErrorKind, message: str):
    return output_cls(ok=False, error=message, error_kind=kind)


def _option_problem(options: List[DishOption]) -> Optional[str]:
    """Option names, and choice names inside an option, must be unique."""
    names = [option.name for option in options]
    if len(names) != len(set(names)):
        return "Option names must be unique"
    for option in options:
        choices = [choice.name for choice in option.choices or []]
        if len(choices) != len(set(choices)):
            return f"Choices of option '{option.name}' must be unique"
    return None


def _dump_options(options: List[DishOption]) -> list:
    return [option.model_dump(exclude_none=True) for option in options]


class CatalogOrchestrator:
    """
    Restaurant and menu management. Owners create, edit and delete their own
    restaurants and dishes; anyone may read a menu.
    """

    def __init__(self, restaurant_repo: IRestaurantRepository):
        self.restaurant_repo = restaurant_repo

    # --- RESTAURANTS ---

    def create_restaurant(self, owner, restaurant_input: CreateRestaurantInput) -> CreateRestaurantOutput:
        if owner.role != UserRole.OWNER:
            return _fail(CreateRestaurantOutput, ErrorKind.UNAUTHORIZED, "Only owners can create restaurants")
        try:
            restaurant = self.restaurant_repo.create_restaurant(
                owner.id, restaurant_input.name, restaurant_input.address
            )
        except Exception:
            logger.exception(f"❌ Could not create restaurant for user {owner.id}")
            return _fail(CreateRestaurantOutput, ErrorKind.INTERNAL, "Could not create restaurant")

        logger.info(f"✅ Restaurant {restaurant.id} created by user {owner.id}")
        return CreateRestaurantOutput(ok=True, restaurant_id=restaurant.id)

    def edit_restaurant(self, owner, restaurant_id: int, restaurant_input: EditRestaurantInput) -> CoreOutput:
        changes = restaurant_input.model_dump(exclude_unset=True)
        if changes.get("name", "") is None:
            changes.pop("name")
        if not changes:
            return _fail(CoreOutput, ErrorKind.INVALID, "Nothing to update")

        try:
            denied = self._check_owner(owner, restaurant_id)
            if denied:
                return denied
            self.restaurant_repo.update_restaurant(restaurant_id, changes)
        except Exception:
            logger.exception(f"❌ Could not edit restaurant {restaurant_id}")
            return _fail(CoreOutput, ErrorKind.INTERNAL, "Could not edit restaurant")
        return CoreOutput(ok=True)

    def delete_restaurant(self, owner, restaurant_id: int) -> CoreOutput:
        try:
            denied = self._check_owner(owner, restaurant_id)
            if denied:
                return denied
            self.restaurant_repo.delete_restaurant(restaurant_id)
        except Exception:
            logger.exception(f"❌ Could not delete restaurant {restaurant_id}")
            return _fail(CoreOutput, ErrorKind.INTERNAL, "Could not delete restaurant")

        logger.info(f"Restaurant {restaurant_id} deleted by user {owner.id}")
        return CoreOutput(ok=True)

    def my_restaurants(self, owner) -> MyRestaurantsOutput:
        if owner.role != UserRole.OWNER:
            return _fail(MyRestaurantsOutput, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)
        try:
            restaurants = self.restaurant_repo.list_owner_restaurants(owner.id)
            return MyRestaurantsOutput(
                ok=True, restaurants=[RestaurantRead.model_validate(restaurant) for restaurant in restaurants]
            )
        except Exception:
            logger.exception(f"❌ Could not list restaurants of user {owner.id}")
            return _fail(MyRestaurantsOutput, ErrorKind.INTERNAL, "Could not find restaurants")

    def my_restaurant(self, owner, restaurant_id: int) -> RestaurantOutput:
        """Someone else's restaurant reads as missing."""
        try:
            restaurant = self.restaurant_repo.get_restaurant(restaurant_id)
            if restaurant is None or restaurant.owner_id != owner.id:
                return _fail(RestaurantOutput, ErrorKind.NOT_FOUND, RESTAURANT_NOT_FOUND)
            return self._with_menu(restaurant)
        except Exception:
            logger.exception(f"❌ Could not load restaurant {restaurant_id}")
            return _fail(RestaurantOutput, ErrorKind.INTERNAL, "Could not find restaurant")

    def restaurant_menu(self, restaurant_id: int) -> RestaurantOutput:
        try:
            restaurant = self.restaurant_repo.get_restaurant(restaurant_id)
            if restaurant is None:
                return _fail(RestaurantOutput, ErrorKind.NOT_FOUND, RESTAURANT_NOT_FOUND)
            return self._with_menu(restaurant)
        except Exception:
            logger.exception(f"❌ Could not load restaurant {restaurant_id}")
            return _fail(RestaurantOutput, ErrorKind.INTERNAL, "Could not find restaurant")

    # --- DISHES ---

    def create_dish(self, owner, restaurant_id: int, dish_input: CreateDishInput) -> CreateDishOutput:
        problem = _option_problem(dish_input.options)
        if problem:
            return _fail(CreateDishOutput, ErrorKind.INVALID, problem)

        try:
            denied = self._check_owner(owner, restaurant_id, CreateDishOutput)
            if denied:
                return denied
            fields = dish_input.model_dump(exclude={"options"})
            fields["options"] = _dump_options(dish_input.options)
            dish = self.restaurant_repo.create_dish(restaurant_id, fields)
        except Exception:
            logger.exception(f"❌ Could not create dish in restaurant {restaurant_id}")
            return _fail(CreateDishOutput, ErrorKind.INTERNAL, "Could not create dish")

        logger.info(f"✅ Dish {dish.id} added to restaurant {restaurant_id}")
        return CreateDishOutput(ok=True, dish_id=dish.id)

    def edit_dish(self, owner, dish_id: int, dish_input: EditDishInput) -> CoreOutput:
        changes = {
            field: value
            for field, value in dish_input.model_dump(exclude_unset=True, exclude={"options"}).items()
            if value is not None or field == "description"
        }
        if dish_input.options is not None:
            problem = _option_problem(dish_input.options)
            if problem:
                return _fail(CoreOutput, ErrorKind.INVALID, problem)
            changes["options"] = _dump_options(dish_input.options)
        if not changes:
            return _fail(CoreOutput, ErrorKind.INVALID, "Nothing to update")

        try:
            denied = self._check_dish_owner(owner, dish_id)
            if denied:
                return denied
            self.restaurant_repo.update_dish(dish_id, changes)
        except Exception:
            logger.exception(f"❌ Could not edit dish {dish_id}")
            return _fail(CoreOutput, ErrorKind.INTERNAL, "Could not edit dish")
        return CoreOutput(ok=True)

    def delete_dish(self, owner, dish_id: int) -> CoreOutput:
        try:
            denied = self._check_dish_owner(owner, dish_id)
            if denied:
                return denied
            self.restaurant_repo.delete_dish(dish_id)
        except Exception:
            logger.exception(f"❌ Could not delete dish {dish_id}")
            return _fail(CoreOutput, ErrorKind.INTERNAL, "Could not delete dish")

        logger.info(f"Dish {dish_id} deleted by user {owner.id}")
        return CoreOutput(ok=True)

    # --- HELPERS ---

    def _check_owner(self, owner, restaurant_id: int, output_cls=CoreOutput):
        restaurant = self.restaurant_repo.get_restaurant(restaurant_id)
        if restaurant is None:
            return _fail(output_cls, ErrorKind.NOT_FOUND, RESTAURANT_NOT_FOUND)
        if owner.role != UserRole.OWNER or restaurant.owner_id != owner.id:
            return _fail(output_cls, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)
        return None

    def _check_dish_owner(self, owner, dish_id: int):
        dish = self.restaurant_repo.find_dish(dish_id)
        if dish is None:
            return _fail(CoreOutput, ErrorKind.NOT_FOUND, DISH_NOT_FOUND)
        if owner.role != UserRole.OWNER or dish.restaurant.owner_id != owner.id:
            return _fail(CoreOutput, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)
        return None

    def _with_menu(self, restaurant) -> RestaurantOutput:
        dishes = self.restaurant_repo.list_dishes(restaurant.id)
        return RestaurantOutput(
            ok=True,
            restaurant=RestaurantRead.model_validate(restaurant),
            menu=[DishRead.model_validate(dish) for dish in dishes],
        )
