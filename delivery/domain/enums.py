from enum import Enum


class UserRole(str, Enum):
    CLIENT = "Client"
    OWNER = "Owner"
    DELIVERY = "Delivery"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    COOKING = "Cooking"
    COOKED = "Cooked"
    PICKED_UP = "PickedUp"
    DELIVERED = "Delivered"

    @property
    def rank(self) -> int:
        """Position in the display order, Pending first."""
        return list(OrderStatus).index(self)


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    INVALID = "INVALID"
    INTERNAL = "INTERNAL"
