from datetime import date
from decimal import Decimal

import pytest

from carrental.models import (
    CarDetail,
    CarInput,
    CarList,
    OrderDetail,
    OrderInput,
    OrderList,
    ValidationError,
)

ORDER_DATA = {
    "car_id": "3",
    "order_date": "2024-03-01",
    "pickup_date": "2024-03-02",
    "dropoff_date": "2024-03-05",
    "pickup_location": "Airport",
    "dropoff_location": "Hotel",
}


def test_car_input_from_mapping():
    car_input = CarInput.from_mapping(
        {"name": "Avanza", "day_rate": "500000", "month_rate": "12000000", "image_name": "a.png"}
    )
    assert car_input == CarInput("Avanza", "500000", "12000000", "a.png")


def test_car_input_image_name_optional():
    car_input = CarInput.from_mapping({"name": "Avanza", "day_rate": "1", "month_rate": "2"})
    assert car_input.image_name == ""


@pytest.mark.parametrize("missing", ["name", "day_rate", "month_rate"])
def test_car_input_requires_fields(missing):
    data = {"name": "Avanza", "day_rate": "1", "month_rate": "2"}
    data[missing] = ""
    with pytest.raises(ValidationError, match="required"):
        CarInput.from_mapping(data)


def test_car_input_reports_every_missing_field():
    with pytest.raises(ValidationError) as info:
        CarInput.from_mapping({})
    message = str(info.value)
    assert "'Name'" in message and "'DayRate'" in message and "'MonthRate'" in message


def test_car_input_to_entity():
    car = CarInput("Avanza", "500000.50", "1e3", "a.png").to_entity()
    assert car.name == "Avanza"
    assert car.image == "a.png"
    assert car.day_rate == Decimal("500000.50")
    assert car.month_rate == Decimal("1000")
    assert car.id == 0


@pytest.mark.parametrize("rate", ["abc", "NaN", "Infinity", "1_000", " 1", "1.2.3", ""])
def test_car_input_rejects_bad_rate(rate):
    with pytest.raises(ValidationError, match="can't convert"):
        CarInput("Avanza", rate, "1", "").to_entity()


def test_order_input_from_mapping():
    order_input = OrderInput.from_mapping(ORDER_DATA)
    assert order_input.car_id == 3
    assert order_input.pickup_location == "Airport"
    assert order_input.dropoff_date == "2024-03-05"


def test_order_input_accepts_integer_car_id():
    assert OrderInput.from_mapping({**ORDER_DATA, "car_id": 4}).car_id == 4


@pytest.mark.parametrize("car_id", ["abc", "1.5", " 3", True])
def test_order_input_rejects_bad_car_id(car_id):
    with pytest.raises(ValidationError):
        OrderInput.from_mapping({**ORDER_DATA, "car_id": car_id})


@pytest.mark.parametrize("car_id", [0, "0", None])
def test_order_input_requires_car_id(car_id):
    with pytest.raises(ValidationError, match="CarID"):
        OrderInput.from_mapping({**ORDER_DATA, "car_id": car_id})


@pytest.mark.parametrize(
    "key", ["order_date", "pickup_date", "dropoff_date", "pickup_location", "dropoff_location"]
)
def test_order_input_requires_text_fields(key):
    data = dict(ORDER_DATA)
    del data[key]
    with pytest.raises(ValidationError, match="required"):
        OrderInput.from_mapping(data)


def test_order_input_to_entity():
    order = OrderInput.from_mapping(ORDER_DATA).to_entity()
    assert order.car_id == 3
    assert order.order_date == date(2024, 3, 1)
    assert order.pickup_date == date(2024, 3, 2)
    assert order.dropoff_date == date(2024, 3, 5)
    assert order.dropoff_location == "Hotel"


@pytest.mark.parametrize("value", ["2024-3-01", "01-03-2024", "2024-02-30", "2024-03-01T00:00", "x"])
def test_order_input_rejects_bad_date(value):
    order_input = OrderInput.from_mapping({**ORDER_DATA, "pickup_date": value})
    with pytest.raises(ValidationError, match="parsing time"):
        order_input.to_entity()


def test_car_list_to_dict():
    assert CarList(1, "Avanza", "a.png").to_dict() == {"id": 1, "name": "Avanza", "image": "a.png"}


def test_order_views_share_layout():
    fields = dict(
        id=2,
        car_id=3,
        car_name="Avanza",
        order_date=date(2024, 3, 1),
        pickup_date=date(2024, 3, 2),
        dropoff_date=date(2024, 3, 5),
        pickup_location="Airport",
        dropoff_location="Hotel",
    )
    listed = OrderList(**fields).to_dict()
    detailed = OrderDetail(**fields).to_dict()
    assert listed == detailed
    assert listed["car_name"] == "Avanza"
    assert listed["pickup_date"].startswith("2024-03-02")


def test_car_detail_to_dict_includes_orders():
    detail = CarDetail(
        id=1,
        name="Avanza",
        day_rate=Decimal("500000"),
        month_rate=Decimal("12000000"),
        image="a.png",
        orders=[OrderList(id=5, car_id=1, car_name="Avanza")],
    )
    data = detail.to_dict()
    assert data["day_rate"] == "500000"
    assert [order["id"] for order in data["orders"]] == [5]
    assert data["orders"][0]["car_name"] == "Avanza"