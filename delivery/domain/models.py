from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from delivery.domain.enums import UserRole, OrderStatus
from delivery.domain.schemas import DishOption
from delivery.infrastructure.database import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class TimestampMixin:
    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class User(TimestampMixin, Base):
    __tablename__ = "users"

    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(SAEnum(UserRole, name="user_role", values_callable=_enum_values), nullable=False)
    # WhatsApp number used for owner notifications, e.g. "+593999999999"
    phone = Column(String, nullable=True)


class Restaurant(TimestampMixin, Base):
    __tablename__ = "restaurants"

    name = Column(String, nullable=False)
    address = Column(String, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    owner = relationship("User", lazy="joined")
    dishes = relationship("Dish", back_populates="restaurant", cascade="all, delete-orphan", order_by="Dish.id")


class Dish(TimestampMixin, Base):
    __tablename__ = "dishes"

    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)

    # List of DishOption dicts: [{"name": "Size", "choices": [{"name": "L", "extra": 2}]}]
    options = Column(JSON, nullable=True)

    restaurant = relationship("Restaurant", back_populates="dishes", lazy="joined")

    @property
    def option_definitions(self) -> list[DishOption]:
        return [DishOption.model_validate(option) for option in (self.options or [])]


class Order(TimestampMixin, Base):
    __tablename__ = "orders"

    customer_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    driver_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="SET NULL"), nullable=True, index=True)
    total = Column(Integer, nullable=False, default=0)
    status = Column(
        SAEnum(OrderStatus, name="order_status", values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
    )

    customer = relationship("User", foreign_keys=[customer_id], lazy="joined")
    driver = relationship("User", foreign_keys=[driver_id], lazy="joined")
    restaurant = relationship("Restaurant", lazy="joined")
    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )


class OrderItem(TimestampMixin, Base):
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    dish_id = Column(Integer, ForeignKey("dishes.id", ondelete="SET NULL"), nullable=True)

    # What the customer picked: [{"name": "Size", "choice": "L"}]
    options = Column(JSON, nullable=True)
    # Line price frozen at creation, later catalog edits do not change it.
    price = Column(Integer, nullable=False, default=0)

    order = relationship("Order", back_populates="items")
    dish = relationship("Dish", lazy="joined")

    @property
    def dish_name(self) -> str | None:
        return self.dish.name if self.dish is not None else None
