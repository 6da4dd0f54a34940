"""
Visibility and edit rules by role.
"""
from types import SimpleNamespace

import pytest

from delivery.domain import policies
from delivery.domain.enums import OrderStatus, UserRole


CUSTOMER_ID, DRIVER_ID, OWNER_ID, STRANGER_ID = 1, 2, 3, 99


def make_order(customer_id=CUSTOMER_ID, driver_id=DRIVER_ID, owner_id=OWNER_ID, status=OrderStatus.PENDING):
    restaurant = SimpleNamespace(owner_id=owner_id) if owner_id is not None else None
    return SimpleNamespace(customer_id=customer_id, driver_id=driver_id, restaurant=restaurant, status=status)


def actor(user_id, role):
    return SimpleNamespace(id=user_id, role=role)


class TestCanView:

    @pytest.mark.parametrize("user", [
        actor(CUSTOMER_ID, UserRole.CLIENT),
        actor(DRIVER_ID, UserRole.DELIVERY),
        actor(OWNER_ID, UserRole.OWNER),
    ])
    def test_related_actor_sees_order(self, user):
        assert policies.can_view(user, make_order())

    @pytest.mark.parametrize("user", [
        actor(STRANGER_ID, UserRole.CLIENT),
        actor(STRANGER_ID, UserRole.DELIVERY),
        actor(STRANGER_ID, UserRole.OWNER),
        # right id, wrong role
        actor(CUSTOMER_ID, UserRole.OWNER),
        actor(OWNER_ID, UserRole.CLIENT),
        actor(DRIVER_ID, UserRole.CLIENT),
    ])
    def test_unrelated_actor_is_denied(self, user):
        assert not policies.can_view(user, make_order())

    def test_driver_cannot_see_unassigned_order(self):
        assert not policies.can_view(actor(DRIVER_ID, UserRole.DELIVERY), make_order(driver_id=None))

    def test_owner_cannot_see_order_without_restaurant(self):
        assert not policies.can_view(actor(OWNER_ID, UserRole.OWNER), make_order(owner_id=None))

    def test_unknown_role_is_denied(self):
        assert not policies.can_view(actor(CUSTOMER_ID, "Admin"), make_order())


class TestCanEdit:

    ALLOWED = {
        (UserRole.OWNER, OrderStatus.COOKING),
        (UserRole.OWNER, OrderStatus.COOKED),
        (UserRole.DELIVERY, OrderStatus.PICKED_UP),
        (UserRole.DELIVERY, OrderStatus.DELIVERED),
    }

    @pytest.mark.parametrize("role", list(UserRole))
    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_only_enumerated_pairs_are_allowed(self, role, status):
        expected = (role, status) in self.ALLOWED
        assert policies.can_edit(actor(1, role), make_order(), status) is expected

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_client_never_edits(self, status):
        assert not policies.can_edit(actor(CUSTOMER_ID, UserRole.CLIENT), make_order(), status)

    def test_every_role_has_rules(self):
        """Adding a role without rules would silently deny or break it."""
        assert set(policies.VISIBILITY_RELATIONS) == set(UserRole)
        assert set(policies.EDITABLE_STATUSES) == set(UserRole)


class TestTransitions:

    def test_owner_cooked_is_announced(self):
        assert policies.announces_cooked(actor(OWNER_ID, UserRole.OWNER), OrderStatus.COOKED)
        assert not policies.announces_cooked(actor(OWNER_ID, UserRole.OWNER), OrderStatus.COOKING)
        assert not policies.announces_cooked(actor(DRIVER_ID, UserRole.DELIVERY), OrderStatus.COOKED)

    @pytest.mark.parametrize("current,requested,expected", [
        (OrderStatus.PENDING, OrderStatus.COOKING, True),
        (OrderStatus.COOKING, OrderStatus.COOKED, True),
        (OrderStatus.PENDING, OrderStatus.DELIVERED, True),
        (OrderStatus.COOKED, OrderStatus.COOKED, False),
        (OrderStatus.COOKED, OrderStatus.COOKING, False),
        (OrderStatus.DELIVERED, OrderStatus.PICKED_UP, False),
    ])
    def test_forward_transition(self, current, requested, expected):
        assert policies.is_forward_transition(current, requested) is expected
