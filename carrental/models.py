"""Request inputs and response views for cars and orders."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from .entities import Car, Order, _format_date, _format_decimal

_DATE_LAYOUT = "2006-01-02"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class ValidationError(ValueError):
    """Raised when input data is missing or cannot be parsed."""


def _required_message(struct: str, field_name: str) -> str:
    return (
        f"Key: '{struct}.{field_name}' Error:Field validation for "
        f"'{field_name}' failed on the 'required' tag"
    )


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _parse_decimal(text: str) -> Decimal:
    if not _DECIMAL_PATTERN.fullmatch(text):
        raise ValidationError(f"can't convert {text} to decimal")
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValidationError(f"can't convert {text} to decimal") from exc


def _parse_date(text: str) -> date:
    message = f'parsing time "{text}" as "{_DATE_LAYOUT}": cannot parse'
    if not _DATE_PATTERN.fullmatch(text):
        raise ValidationError(message)
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(message) from exc


def _parse_car_id(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"invalid car_id: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value)
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValidationError(f"invalid car_id: {text!r}")
    return int(text)


def _order_view_dict(view: OrderList | OrderDetail) -> dict:
    return {
        "id": view.id,
        "car_id": view.car_id,
        "car_name": view.car_name,
        "order_date": _format_date(view.order_date),
        "pickup_date": _format_date(view.pickup_date),
        "dropoff_date": _format_date(view.dropoff_date),
        "pickup_location": view.pickup_location,
        "dropoff_location": view.dropoff_location,
    }


@dataclass
class OrderList:
    """An order as shown in listings."""

    id: int = 0
    car_id: int = 0
    car_name: str = ""
    order_date: date | None = None
    pickup_date: date | None = None
    dropoff_date: date | None = None
    pickup_location: str = ""
    dropoff_location: str = ""

    def to_dict(self) -> dict:
        return _order_view_dict(self)


@dataclass
class OrderDetail:
    """A single order with its car's name."""

    id: int = 0
    car_id: int = 0
    car_name: str = ""
    order_date: date | None = None
    pickup_date: date | None = None
    dropoff_date: date | None = None
    pickup_location: str = ""
    dropoff_location: str = ""

    def to_dict(self) -> dict:
        return _order_view_dict(self)


@dataclass
class CarDetail:
    """A single car with its rates and orders."""

    id: int = 0
    name: str = ""
    day_rate: Decimal = Decimal(0)
    month_rate: Decimal = Decimal(0)
    image: str = ""
    orders: list[OrderList] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "day_rate": _format_decimal(self.day_rate),
            "month_rate": _format_decimal(self.month_rate),
            "image": self.image,
            "orders": [order.to_dict() for order in self.orders],
        }


@dataclass
class CarList:
    """A car as shown in listings."""

    id: int = 0
    name: str = ""
    image: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "image": self.image}


@dataclass
class CarInput:
    """Submitted car data; rates are kept as text until converted."""

    name: str
    day_rate: str
    month_rate: str
    image_name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CarInput:
        """Build from form or JSON fields, requiring name and both rates."""
        values = {key: _text(data, key) for key in ("name", "day_rate", "month_rate")}
        field_names = {"name": "Name", "day_rate": "DayRate", "month_rate": "MonthRate"}
        errors = [
            _required_message("CarInput", field_names[key])
            for key, value in values.items()
            if not value
        ]
        if errors:
            raise ValidationError("\n".join(errors))
        return cls(image_name=_text(data, "image_name"), **values)

    def to_entity(self) -> Car:
        """Convert to a car record, parsing the rates as decimals."""
        return Car(
            name=self.name,
            day_rate=_parse_decimal(self.day_rate),
            month_rate=_parse_decimal(self.month_rate),
            image=self.image_name,
        )


@dataclass
class OrderInput:
    """Submitted order data; dates are kept as YYYY-MM-DD text."""

    car_id: int
    order_date: str
    pickup_date: str
    dropoff_date: str
    pickup_location: str
    dropoff_location: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> OrderInput:
        """Build from form or JSON fields; every field is required."""
        car_id = _parse_car_id(data.get("car_id"))
        text_fields = {
            "order_date": "OrderDate",
            "pickup_date": "PickupDate",
            "dropoff_date": "DropoffDate",
            "pickup_location": "PickupLocation",
            "dropoff_location": "DropoffLocation",
        }
        values = {key: _text(data, key) for key in text_fields}
        errors = []
        if car_id == 0:
            errors.append(_required_message("OrderInput", "CarID"))
        errors.extend(
            _required_message("OrderInput", text_fields[key])
            for key, value in values.items()
            if not value
        )
        if errors:
            raise ValidationError("\n".join(errors))
        return cls(car_id=car_id, **values)

    def to_entity(self) -> Order:
        """Convert to an order record, parsing the three dates."""
        return Order(
            car_id=self.car_id,
            order_date=_parse_date(self.order_date),
            pickup_date=_parse_date(self.pickup_date),
            dropoff_date=_parse_date(self.dropoff_date),
            pickup_location=self.pickup_location,
            dropoff_location=self.dropoff_location,
        )