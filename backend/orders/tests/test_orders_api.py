from unittest import mock

import pytest
from django.urls import reverse

from discounts.models import Coupon
from orders.models import Order
from .factories import order_payload


@pytest.fixture(autouse=True)
def print_task():
    with mock.patch("orders.services.print_order_documents") as task:
        yield task


def json_payload(**overrides):
    payload = order_payload(**overrides)
    for item in payload["items"]:
        item["price"] = str(item["price"])
        for modifier in item["modifiers"]:
            modifier["price"] = str(modifier["price"])
    return payload


@pytest.mark.django_db
class TestCreateOrderAPI:
    def test_create_order(self, api_client, shop):
        response = api_client.post(
            reverse("order-create"),
            json_payload(discount={"type": "percentage", "value": "10"}),
            format="json",
        )

        assert response.status_code == 201
        data = response.data["data"]
        assert data["total"] == "13.84"
        assert data["discount_amount"] == "1.40"
        assert data["items"][0]["modifiers"][0]["name"] == "Cheese"

    def test_unknown_coupon_is_404(self, api_client, shop):
        response = api_client.post(reverse("order-create"), json_payload(coupon_code="NOPE"), format="json")

        assert response.status_code == 404
        assert response.data == {"success": False, "error": "Invalid coupon code", "code": "not_found"}
        assert Order.objects.count() == 0

    def test_coupon_below_minimum_is_400(self, api_client, shop):
        Coupon.objects.create(code="BIG", type=Coupon.CouponType.FIXED, value="5", min_order_amount="50")

        response = api_client.post(reverse("order-create"), json_payload(coupon_code="BIG"), format="json")

        assert response.status_code == 400
        assert response.data["code"] == "below_minimum"
        assert response.data["error"] == "Minimum order amount of $50.00 required"

    def test_discount_and_coupon_together_rejected(self, api_client, shop):
        response = api_client.post(
            reverse("order-create"),
            json_payload(coupon_code="SAVE10", discount={"type": "fixed", "value": "1"}),
            format="json",
        )

        assert response.status_code == 400
        assert response.data["success"] is False

    def test_empty_items_rejected(self, api_client, shop):
        response = api_client.post(reverse("order-create"), json_payload(items=[]), format="json")
        assert response.status_code == 400

    def test_percentage_over_100_rejected(self, api_client, shop):
        response = api_client.post(
            reverse("order-create"),
            json_payload(discount={"type": "percentage", "value": "150"}),
            format="json",
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestOrderDetailAPI:
    def test_get_order(self, cashier_client, api_client, shop):
        created = api_client.post(reverse("order-create"), json_payload(), format="json").data["data"]

        response = cashier_client.get(reverse("order-detail", args=[created["id"]]))

        assert response.status_code == 200
        assert response.data["data"]["order_number"] == created["order_number"]

    def test_requires_authentication(self, api_client, shop):
        created = api_client.post(reverse("order-create"), json_payload(), format="json").data["data"]

        response = api_client.get(reverse("order-detail", args=[created["id"]]))

        assert response.status_code == 403

    def test_missing_order(self, cashier_client):
        response = cashier_client.get(reverse("order-detail", args=["00000000-0000-0000-0000-000000000000"]))
        assert response.status_code == 404


@pytest.mark.django_db
class TestReprintAPI:
    def test_reprint_on_simulated_printers(self, cashier_client, api_client, shop):
        created = api_client.post(reverse("order-create"), json_payload(), format="json").data["data"]

        response = cashier_client.post(reverse("order-reprint", args=[created["id"]]), {}, format="json")

        assert response.status_code == 200
        assert response.data["success"] is True
        assert [(r["kind"], r["printer"]) for r in response.data["results"]] == [
            ("customer", "simulated-customer"),
            ("kitchen", "simulated-kitchen"),
        ]

    def test_reprint_kitchen_only(self, cashier_client, api_client, shop):
        created = api_client.post(reverse("order-create"), json_payload(), format="json").data["data"]

        response = cashier_client.post(
            reverse("order-reprint", args=[created["id"]]), {"print_type": "kitchen"}, format="json"
        )

        assert [r["kind"] for r in response.data["results"]] == ["kitchen"]
