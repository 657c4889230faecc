import json
from datetime import date
from decimal import Decimal

from carrental.entities import Car, Order


def _car():
    return Car(
        id=3,
        name="Avanza",
        day_rate=Decimal("500000"),
        month_rate=Decimal("12000000.00"),
        image="avanza.png",
    )


def _order(car=None):
    return Order(
        id=7,
        car_id=3,
        order_date=date(2024, 3, 1),
        pickup_date=date(2024, 3, 2),
        dropoff_date=date(2024, 3, 5),
        pickup_location="Airport",
        dropoff_location="Hotel",
        car=car,
    )


def test_car_to_dict_keys():
    assert set(_car().to_dict()) == {"id", "name", "day_rate", "month_rate", "image", "orders"}


def test_car_to_dict_values():
    data = _car().to_dict()
    assert data["id"] == 3
    assert data["name"] == "Avanza"
    assert data["image"] == "avanza.png"
    assert data["day_rate"] == "500000"
    assert data["month_rate"] == "12000000"
    assert data["orders"] == []


def test_car_decimal_trailing_zeros_dropped():
    car = Car(day_rate=Decimal("1.50"), month_rate=Decimal("0.00"))
    data = car.to_dict()
    assert data["day_rate"] == "1.5"
    assert data["month_rate"] == "0"


def test_decimal_string_round_trips():
    car = Car(day_rate=Decimal("1E+3"), month_rate=Decimal("2.25"))
    data = car.to_dict()
    assert Decimal(data["day_rate"]) == car.day_rate
    assert Decimal(data["month_rate"]) == car.month_rate
    assert "E" not in data["day_rate"]


def test_order_to_dict_dates():
    data = _order().to_dict()
    assert data["order_date"] == "2024-03-01T00:00:00Z"
    assert data["pickup_date"].startswith(date(2024, 3, 2).isoformat())
    assert data["dropoff_date"].startswith(date(2024, 3, 5).isoformat())


def test_order_without_dates_uses_zero_time():
    data = Order().to_dict()
    assert data["order_date"] == "0001-01-01T00:00:00Z"
    assert data["order_date"] == data["pickup_date"] == data["dropoff_date"]


def test_order_without_car_has_empty_car():
    car = _order().to_dict()["car"]
    assert car["id"] == 0
    assert car["name"] == ""
    assert car["orders"] == []


def test_order_with_car_embeds_car():
    data = _order(car=Car(id=3, name="Avanza")).to_dict()
    assert data["car"]["id"] == 3
    assert data["car"]["name"] == "Avanza"


def test_car_with_orders_is_json_serialisable():
    car = _car()
    car.orders = [_order(), _order()]
    decoded = json.loads(json.dumps(car.to_dict()))
    assert len(decoded["orders"]) == 2
    assert decoded["orders"][0]["pickup_location"] == "Airport"
    assert decoded["orders"][1]["dropoff_location"] == "Hotel"