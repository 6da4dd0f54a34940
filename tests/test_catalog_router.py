"""
HTTP tests for restaurant and dish management routes.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from delivery.interfaces import catalog_router


@pytest.fixture
def client(catalog, user_repo):
    app = FastAPI()
    app.state.catalog = catalog
    app.state.user_repo = user_repo
    app.include_router(catalog_router.router)
    return TestClient(app)


def as_user(user):
    return {"X-User-Id": str(user.id)}


class TestCatalogApi:

    def test_owner_builds_a_menu(self, client, data):
        response = client.post("/restaurants", json={"name": "Taco Stand"}, headers=as_user(data["owner"]))
        assert response.status_code == 201, response.json()
        restaurant_id = response.json()["restaurant_id"]

        response = client.post(
            f"/restaurants/{restaurant_id}/dishes",
            json={"name": "Taco", "price": 3, "options": [{"name": "Salsa", "extra": 1}]},
            headers=as_user(data["owner"]),
        )
        assert response.status_code == 201, response.json()
        dish_id = response.json()["dish_id"]

        response = client.patch(f"/dishes/{dish_id}", json={"price": 4}, headers=as_user(data["owner"]))
        assert response.status_code == 200

        # The menu is public
        menu = client.get(f"/restaurants/{restaurant_id}/menu").json()["menu"]
        assert menu == [{
            "id": dish_id,
            "name": "Taco",
            "price": 4,
            "description": None,
            "restaurant_id": restaurant_id,
            "options": [{"name": "Salsa", "extra": 1, "choices": None}],
        }]

        mine = client.get("/restaurants/mine", headers=as_user(data["owner"])).json()["restaurants"]
        assert [restaurant["name"] for restaurant in mine] == ["Burger Hub", "Taco Stand"]

        assert client.delete(f"/dishes/{dish_id}", headers=as_user(data["owner"])).status_code == 200
        assert client.delete(f"/restaurants/{restaurant_id}", headers=as_user(data["owner"])).status_code == 200
        assert client.get(f"/restaurants/{restaurant_id}/menu").status_code == 404

    def test_client_cannot_create_restaurant(self, client, data):
        response = client.post("/restaurants", json={"name": "Taco Stand"}, headers=as_user(data["client"]))

        assert response.status_code == 403
        assert response.json()["error_kind"] == "UNAUTHORIZED"

    def test_other_owner_gets_403_on_edit(self, client, data):
        response = client.patch(
            f"/restaurants/{data['restaurant'].id}", json={"name": "Stolen"}, headers=as_user(data["other_owner"])
        )

        assert response.status_code == 403

    def test_my_restaurant_hides_others(self, client, data):
        response = client.get(f"/restaurants/mine/{data['other_restaurant'].id}", headers=as_user(data["owner"]))

        assert response.status_code == 404

    def test_duplicate_options_are_400(self, client, data):
        response = client.post(
            f"/restaurants/{data['restaurant'].id}/dishes",
            json={"name": "Shake", "price": 5, "options": [{"name": "Size"}, {"name": "Size"}]},
            headers=as_user(data["owner"]),
        )

        assert response.status_code == 400
        assert response.json()["error_kind"] == "INVALID"

    def test_negative_price_is_rejected_by_validation(self, client, data):
        response = client.post(
            f"/restaurants/{data['restaurant'].id}/dishes",
            json={"name": "Shake", "price": -1},
            headers=as_user(data["owner"]),
        )

        assert response.status_code == 422

    def test_missing_header_is_401(self, client, data):
        assert client.post("/restaurants", json={"name": "Taco Stand"}).status_code == 401
