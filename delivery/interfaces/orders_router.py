from fastapi import APIRouter, Depends

from delivery.domain.enums import OrderStatus
from delivery.domain.schemas import CreateOrderInput, EditOrderInput
from delivery.interfaces.dependencies import get_current_actor, get_orchestrator, respond

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("")
def create_order(
    payload: CreateOrderInput,
    actor=Depends(get_current_actor),
    orchestrator=Depends(get_orchestrator),
):
    return respond(orchestrator.create_order(actor, payload), success_code=201)


@router.get("")
def list_orders(
    status: OrderStatus | None = None,
    actor=Depends(get_current_actor),
    orchestrator=Depends(get_orchestrator),
):
    return respond(orchestrator.list_orders(actor, status=status))


@router.get("/{order_id}")
def get_order(order_id: int, actor=Depends(get_current_actor), orchestrator=Depends(get_orchestrator)):
    return respond(orchestrator.get_order(actor, order_id))


@router.patch("/{order_id}")
def edit_order(
    order_id: int,
    payload: EditOrderInput,
    actor=Depends(get_current_actor),
    orchestrator=Depends(get_orchestrator),
):
    return respond(orchestrator.edit_order(actor, order_id, payload.status))


@router.post("/{order_id}/take")
def take_order(order_id: int, actor=Depends(get_current_actor), orchestrator=Depends(get_orchestrator)):
    return respond(orchestrator.take_order(actor, order_id))
