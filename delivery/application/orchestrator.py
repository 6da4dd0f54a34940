import logging
from typing import Optional

from delivery.domain import policies
from delivery.domain.enums import ErrorKind, OrderStatus, UserRole
from delivery.domain.events import NEW_COOKED_ORDER, NEW_ORDER_UPDATE, NEW_PENDING_ORDER
from delivery.domain.pricing import order_total, price_line
from delivery.domain.schemas import (
    CreateOrderInput,
    CreateOrderOutput,
    EditOrderOutput,
    GetOrderOutput,
    GetOrdersOutput,
    OrderRead,
    TakeOrderOutput,
)
from delivery.interfaces.IEventPublisher import IEventPublisher
from delivery.interfaces.IOrderRepository import IOrderRepository
from delivery.interfaces.IRestaurantRepository import IRestaurantRepository

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized"
ORDER_NOT_FOUND = "Order not found"


def _fail(output_cls, kind: ErrorKind, message: str):
    return output_cls(ok=False, error=message, error_kind=kind)


class OrderOrchestrator:
    """
    Order lifecycle: placing, reading, status edits and driver assignment.

    Every operation returns an output model instead of raising. Lookups and
    writes go through the injected repositories; lifecycle events are
    published after the write is committed and cannot undo it.
    """

    def __init__(
        self,
        order_repo: IOrderRepository,
        restaurant_repo: IRestaurantRepository,
        publisher: IEventPublisher,
        strict_transitions: bool = False,
    ):
        self.order_repo = order_repo
        self.restaurant_repo = restaurant_repo
        self.publisher = publisher  # Injected event bus
        self.strict_transitions = strict_transitions

    # --- OPERATIONS ---

    def create_order(self, customer, order_input: CreateOrderInput) -> CreateOrderOutput:
        if customer.role != UserRole.CLIENT:
            return _fail(CreateOrderOutput, ErrorKind.UNAUTHORIZED, "Only customers can place orders")
        if not order_input.items:
            return _fail(CreateOrderOutput, ErrorKind.INVALID, "An order needs at least one item")

        try:
            restaurant = self.restaurant_repo.get_restaurant(order_input.restaurant_id)
            if restaurant is None:
                return _fail(CreateOrderOutput, ErrorKind.NOT_FOUND, "Restaurant not found")

            # 1. Resolve every dish before writing anything
            items = []
            for item in order_input.items:
                dish = self.restaurant_repo.get_dish(item.dish_id, restaurant.id)
                if dish is None:
                    return _fail(CreateOrderOutput, ErrorKind.NOT_FOUND, f"Dish {item.dish_id} not found")
                items.append({
                    "dish_id": dish.id,
                    "options": [option.model_dump() for option in item.options],
                    "price": price_line(dish.price, dish.option_definitions, item.options),
                })

            # 2. Persist order + items together
            total = order_total(item["price"] for item in items)
            order = self.order_repo.create_order(customer.id, restaurant.id, total, items)
        except Exception:
            logger.exception("❌ Could not create order")
            return _fail(CreateOrderOutput, ErrorKind.INTERNAL, "Could not create order")

        logger.info(f"✅ Order {order.id} placed by user {customer.id} (total {total})")
        self._publish(NEW_PENDING_ORDER, lambda: {"order": self._serialize(order), "owner_id": restaurant.owner_id})
        return CreateOrderOutput(ok=True, order_id=order.id)

    def get_order(self, actor, order_id: int) -> GetOrderOutput:
        try:
            order = self.order_repo.get_order(order_id)
            if order is None:
                return _fail(GetOrderOutput, ErrorKind.NOT_FOUND, ORDER_NOT_FOUND)
            if not policies.can_view(actor, order):
                return _fail(GetOrderOutput, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)
            return GetOrderOutput(ok=True, order=OrderRead.model_validate(order))
        except Exception:
            logger.exception(f"❌ Could not load order {order_id}")
            return _fail(GetOrderOutput, ErrorKind.INTERNAL, "Could not load order")

    def list_orders(self, actor, status: Optional[OrderStatus] = None) -> GetOrdersOutput:
        # The actor's role alone decides which orders are reachable.
        scopes = {
            UserRole.CLIENT: self.order_repo.list_customer_orders,
            UserRole.DELIVERY: self.order_repo.list_driver_orders,
            UserRole.OWNER: self.order_repo.list_owner_orders,
        }
        scope = scopes.get(actor.role)
        if scope is None:
            return _fail(GetOrdersOutput, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)

        try:
            orders = scope(actor.id, status=status)
            return GetOrdersOutput(ok=True, orders=[OrderRead.model_validate(order) for order in orders])
        except Exception:
            logger.exception(f"❌ Could not list orders for user {actor.id}")
            return _fail(GetOrdersOutput, ErrorKind.INTERNAL, "Could not get orders")

    def edit_order(self, actor, order_id: int, status: OrderStatus) -> EditOrderOutput:
        try:
            order = self.order_repo.get_order(order_id)
            if order is None:
                return _fail(EditOrderOutput, ErrorKind.NOT_FOUND, ORDER_NOT_FOUND)
            if not policies.can_view(actor, order) or not policies.can_edit(actor, order, status):
                return _fail(EditOrderOutput, ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)
            if self.strict_transitions and not policies.is_forward_transition(order.status, status):
                return _fail(
                    EditOrderOutput,
                    ErrorKind.INVALID,
                    f"Order cannot move from {OrderStatus(order.status).value} to {OrderStatus(status).value}",
                )

            updated = self.order_repo.update_status(order_id, status)
            if updated is None:
                return _fail(EditOrderOutput, ErrorKind.NOT_FOUND, ORDER_NOT_FOUND)
        except Exception:
            logger.exception(f"❌ Could not edit order {order_id}")
            return _fail(EditOrderOutput, ErrorKind.INTERNAL, "Could not edit order")

        logger.info(f"Order {order_id} set to {OrderStatus(status).value} by user {actor.id}")
        if policies.announces_cooked(actor, status):
            self._publish(NEW_COOKED_ORDER, lambda: self._serialize(updated))
        self._publish(NEW_ORDER_UPDATE, lambda: self._serialize(updated))
        return EditOrderOutput(ok=True)

    def take_order(self, driver, order_id: int) -> TakeOrderOutput:
        if driver.role != UserRole.DELIVERY:
            return _fail(TakeOrderOutput, ErrorKind.UNAUTHORIZED, "Only drivers can take orders")

        try:
            order = self.order_repo.get_order(order_id)
            if order is None:
                return _fail(TakeOrderOutput, ErrorKind.NOT_FOUND, ORDER_NOT_FOUND)
            # The read above can be stale, the conditional write is what decides.
            if order.driver_id is not None or not self.order_repo.assign_driver(order_id, driver.id):
                return _fail(TakeOrderOutput, ErrorKind.CONFLICT, "The order already has a driver")

            updated = self.order_repo.get_order(order_id)
        except Exception:
            logger.exception(f"❌ Could not assign driver {driver.id} to order {order_id}")
            return _fail(TakeOrderOutput, ErrorKind.INTERNAL, "Could not update order")

        logger.info(f"Order {order_id} taken by driver {driver.id}")
        self._publish(NEW_ORDER_UPDATE, lambda: self._serialize(updated))
        return TakeOrderOutput(ok=True)

    # --- HELPERS ---

    def _publish(self, event: str, build_payload):
        # Runs after the commit, so a failure here only loses the event.
        try:
            self.publisher.publish(event, build_payload())
        except Exception:
            logger.exception(f"❌ Publishing {event} failed")

    @staticmethod
    def _serialize(order) -> dict:
        return OrderRead.model_validate(order).model_dump(mode="json")
