from decimal import Decimal


def burger_item(**overrides):
    item = {
        "product_id": "burger",
        "name": "Burger",
        "price": Decimal("6.49"),
        "quantity": 2,
        "notes": "well done",
        "modifiers": [
            {"id": "cheese", "name": "Cheese", "price": Decimal("0.50")},
            {"id": "no-onion", "name": "No onion", "price": Decimal("0")},
        ],
    }
    item.update(overrides)
    return item


def order_payload(**overrides):
    payload = {
        "order_type": "dine_in",
        "payment_method": "cash",
        "customer_name": "Sam",
        "notes": "Ring the bell",
        "items": [burger_item()],
    }
    payload.update(overrides)
    return payload
