from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from delivery.domain.enums import ErrorKind, OrderStatus


# ---------------------------------------------------------
# MENU DEFINITIONS
# ---------------------------------------------------------
class DishOptionChoice(BaseModel):
    name: str
    extra: Optional[int] = Field(default=None, ge=0)


class DishOption(BaseModel):
    """
    A dish option is either a flat add-on (``extra``) or a set of
    mutually exclusive ``choices`` that may carry their own extra.
    """
    name: str
    extra: Optional[int] = Field(default=None, ge=0)
    choices: Optional[List[DishOptionChoice]] = None


# ---------------------------------------------------------
# INPUTS
# ---------------------------------------------------------
class CreateRestaurantInput(BaseModel):
    name: str = Field(min_length=2, max_length=140)
    address: Optional[str] = None


class EditRestaurantInput(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=140)
    address: Optional[str] = None


class CreateDishInput(BaseModel):
    name: str = Field(min_length=2, max_length=140)
    price: int = Field(ge=0)
    description: Optional[str] = Field(default=None, max_length=140)
    options: List[DishOption] = []


class EditDishInput(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=140)
    price: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=140)
    options: Optional[List[DishOption]] = None


class OrderItemOptionInput(BaseModel):
    name: str
    choice: Optional[str] = None


class CreateOrderItemInput(BaseModel):
    dish_id: int
    options: List[OrderItemOptionInput] = []


class CreateOrderInput(BaseModel):
    restaurant_id: int
    items: List[CreateOrderItemInput]


class EditOrderInput(BaseModel):
    status: OrderStatus


# ---------------------------------------------------------
# READ MODELS
# ---------------------------------------------------------
class RestaurantRead(BaseModel):
    id: int
    name: str
    address: Optional[str]
    owner_id: int

    model_config = ConfigDict(from_attributes=True)


class DishRead(BaseModel):
    id: int
    name: str
    price: int
    description: Optional[str]
    restaurant_id: int
    options: List[DishOption] = Field(default=[], validation_alias="option_definitions")

    model_config = ConfigDict(from_attributes=True)


class OrderItemRead(BaseModel):
    id: int
    dish_id: Optional[int]
    dish_name: Optional[str] = None
    options: List[OrderItemOptionInput] = []
    price: int

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    id: int
    customer_id: Optional[int]
    driver_id: Optional[int]
    restaurant_id: Optional[int]
    total: int
    status: OrderStatus
    items: List[OrderItemRead] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------
# OPERATION OUTPUTS
# ---------------------------------------------------------
class CoreOutput(BaseModel):
    ok: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class CreateOrderOutput(CoreOutput):
    order_id: Optional[int] = None


class GetOrderOutput(CoreOutput):
    order: Optional[OrderRead] = None


class GetOrdersOutput(CoreOutput):
    orders: List[OrderRead] = []


class EditOrderOutput(CoreOutput):
    pass


class TakeOrderOutput(CoreOutput):
    pass


class CreateRestaurantOutput(CoreOutput):
    restaurant_id: Optional[int] = None


class MyRestaurantsOutput(CoreOutput):
    restaurants: List[RestaurantRead] = []


class RestaurantOutput(CoreOutput):
    restaurant: Optional[RestaurantRead] = None
    menu: List[DishRead] = []


class CreateDishOutput(CoreOutput):
    dish_id: Optional[int] = None
