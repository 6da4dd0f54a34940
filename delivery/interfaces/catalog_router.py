from fastapi import APIRouter, Depends

from delivery.domain.schemas import CreateDishInput, CreateRestaurantInput, EditDishInput, EditRestaurantInput
from delivery.interfaces.dependencies import get_catalog, get_current_actor, respond

router = APIRouter(tags=["catalog"])


# --- RESTAURANTS ---

@router.post("/restaurants")
def create_restaurant(payload: CreateRestaurantInput, actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.create_restaurant(actor, payload), success_code=201)


@router.get("/restaurants/mine")
def my_restaurants(actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.my_restaurants(actor))


@router.get("/restaurants/mine/{restaurant_id}")
def my_restaurant(restaurant_id: int, actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.my_restaurant(actor, restaurant_id))


@router.patch("/restaurants/{restaurant_id}")
def edit_restaurant(
    restaurant_id: int,
    payload: EditRestaurantInput,
    actor=Depends(get_current_actor),
    catalog=Depends(get_catalog),
):
    return respond(catalog.edit_restaurant(actor, restaurant_id, payload))


@router.delete("/restaurants/{restaurant_id}")
def delete_restaurant(restaurant_id: int, actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.delete_restaurant(actor, restaurant_id))


@router.get("/restaurants/{restaurant_id}/menu")
def restaurant_menu(restaurant_id: int, catalog=Depends(get_catalog)):
    return respond(catalog.restaurant_menu(restaurant_id))


# --- DISHES ---

@router.post("/restaurants/{restaurant_id}/dishes")
def create_dish(
    restaurant_id: int,
    payload: CreateDishInput,
    actor=Depends(get_current_actor),
    catalog=Depends(get_catalog),
):
    return respond(catalog.create_dish(actor, restaurant_id, payload), success_code=201)


@router.patch("/dishes/{dish_id}")
def edit_dish(dish_id: int, payload: EditDishInput, actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.edit_dish(actor, dish_id, payload))


@router.delete("/dishes/{dish_id}")
def delete_dish(dish_id: int, actor=Depends(get_current_actor), catalog=Depends(get_catalog)):
    return respond(catalog.delete_dish(actor, dish_id))
