"""
Who may see and change an order.

Both tables below are keyed by every ``UserRole`` member, a new role must
be added to each of them (see ``tests/test_policies.py``).
"""
from typing import Optional

from delivery.domain.enums import OrderStatus, UserRole


def _customer_id(order) -> Optional[int]:
    return order.customer_id


def _driver_id(order) -> Optional[int]:
    return order.driver_id


def _restaurant_owner_id(order) -> Optional[int]:
    restaurant = getattr(order, "restaurant", None)
    return restaurant.owner_id if restaurant is not None else None


# The order relation an actor must match, by role.
VISIBILITY_RELATIONS = {
    UserRole.CLIENT: _customer_id,
    UserRole.DELIVERY: _driver_id,
    UserRole.OWNER: _restaurant_owner_id,
}

# Statuses each role may set.
EDITABLE_STATUSES = {
    UserRole.CLIENT: frozenset(),
    UserRole.OWNER: frozenset({OrderStatus.COOKING, OrderStatus.COOKED}),
    UserRole.DELIVERY: frozenset({OrderStatus.PICKED_UP, OrderStatus.DELIVERED}),
}


def can_view(actor, order) -> bool:
    relation = VISIBILITY_RELATIONS.get(actor.role)
    if relation is None:
        return False
    related_id = relation(order)
    return related_id is not None and related_id == actor.id


def can_edit(actor, order, requested_status: OrderStatus) -> bool:
    """Role/status pairing only. Callers check ``can_view`` first."""
    return requested_status in EDITABLE_STATUSES.get(actor.role, frozenset())


def announces_cooked(actor, requested_status: OrderStatus) -> bool:
    return actor.role == UserRole.OWNER and requested_status == OrderStatus.COOKED


def is_forward_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return OrderStatus(requested).rank > OrderStatus(current).rank
