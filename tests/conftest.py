"""
Shared fixtures: an in-memory SQLite database seeded with two restaurants,
their owners, customers and drivers, plus an orchestrator wired to it.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from delivery.application.catalog import CatalogOrchestrator
from delivery.application.orchestrator import OrderOrchestrator
from delivery.domain.enums import UserRole
from delivery.domain.models import Dish, Restaurant, User
from delivery.domain.schemas import CreateOrderInput
from delivery.infrastructure.database import Base
from delivery.infrastructure.repositories.order_repository import SqlOrderRepository
from delivery.infrastructure.repositories.restaurant_repository import SqlRestaurantRepository
from delivery.infrastructure.repositories.user_repository import SqlUserRepository
from delivery.interfaces.IEventPublisher import IEventPublisher


class RecordingPublisher(IEventPublisher):
    """Keeps every published event in order."""

    def __init__(self):
        self.events = []

    def publish(self, event, payload):
        self.events.append((event, payload))

    def names(self):
        return [name for name, _ in self.events]


def build_session_factory(url="sqlite://", **engine_kwargs):
    engine = create_engine(url, connect_args={"check_same_thread": False}, **engine_kwargs)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def seed(session_factory):
    """
    Restaurant "Burger Hub" (owner) serves:
      - Burger, 10: option "Size" with choices Large (+2) / Small, option "Spicy" (+1)
      - Fries, 4: no options
    Restaurant "Pizza Place" (other_owner) serves Pizza, 12.
    """
    session = session_factory()
    try:
        users = {
            "client": User(email="client@test.com", role=UserRole.CLIENT),
            "other_client": User(email="other-client@test.com", role=UserRole.CLIENT),
            "owner": User(email="owner@test.com", role=UserRole.OWNER, phone="+15550001"),
            "other_owner": User(email="other-owner@test.com", role=UserRole.OWNER),
            "driver": User(email="driver@test.com", role=UserRole.DELIVERY),
            "other_driver": User(email="other-driver@test.com", role=UserRole.DELIVERY),
        }
        session.add_all(users.values())
        session.flush()

        restaurant = Restaurant(name="Burger Hub", address="1 Main St", owner_id=users["owner"].id)
        other_restaurant = Restaurant(name="Pizza Place", address="2 Main St", owner_id=users["other_owner"].id)
        session.add_all([restaurant, other_restaurant])
        session.flush()

        burger = Dish(
            name="Burger",
            price=10,
            restaurant_id=restaurant.id,
            options=[
                {"name": "Size", "choices": [{"name": "Large", "extra": 2}, {"name": "Small"}]},
                {"name": "Spicy", "extra": 1},
            ],
        )
        fries = Dish(name="Fries", price=4, restaurant_id=restaurant.id, options=[])
        pizza = Dish(name="Pizza", price=12, restaurant_id=other_restaurant.id)
        session.add_all([burger, fries, pizza])
        session.commit()

        return {
            **users,
            "restaurant": restaurant,
            "other_restaurant": other_restaurant,
            "burger": burger,
            "fries": fries,
            "pizza": pizza,
        }
    finally:
        session.close()


@pytest.fixture
def session_factory():
    return build_session_factory(poolclass=StaticPool)


@pytest.fixture
def data(session_factory):
    return seed(session_factory)


@pytest.fixture
def order_repo(session_factory):
    return SqlOrderRepository(session_factory=session_factory)


@pytest.fixture
def restaurant_repo(session_factory):
    return SqlRestaurantRepository(session_factory=session_factory)


@pytest.fixture
def user_repo(session_factory):
    return SqlUserRepository(session_factory=session_factory)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def orchestrator(order_repo, restaurant_repo, publisher):
    return OrderOrchestrator(order_repo=order_repo, restaurant_repo=restaurant_repo, publisher=publisher)


@pytest.fixture
def catalog(restaurant_repo):
    return CatalogOrchestrator(restaurant_repo=restaurant_repo)


@pytest.fixture
def place_order(orchestrator, data):
    """Places a burger order for ``data["client"]`` and returns its id."""
    def _place(customer=None, restaurant=None, dishes=None):
        customer = customer or data["client"]
        restaurant = restaurant or data["restaurant"]
        dishes = dishes or [data["burger"]]
        output = orchestrator.create_order(
            customer,
            CreateOrderInput(restaurant_id=restaurant.id, items=[{"dish_id": dish.id} for dish in dishes]),
        )
        assert output.ok, output.error
        return output.order_id

    return _place
