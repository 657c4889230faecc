"""Database access for cars and orders."""

from __future__ import annotations

import sqlite3
from datetime import date
from decimal import Decimal

from .entities import Car, Order

_CAR_COLUMNS = "id, name, day_rate, month_rate, image"
_ORDER_SELECT = (
    "SELECT o.id, o.car_id, o.order_date, o.pickup_date, o.dropoff_date,"
    " o.pickup_location, o.dropoff_location, c.name AS car_name"
    " FROM orders o LEFT JOIN cars c ON c.id = o.car_id"
)


def _decimal_from_db(value: float) -> Decimal:
    return Decimal(repr(float(value)))


def _date_to_db(value: date | None) -> str | None:
    return None if value is None else value.isoformat()


def _date_from_db(value: str | None) -> date | None:
    return None if value is None else date.fromisoformat(value)


def _car_from_row(row: sqlite3.Row) -> Car:
    return Car(
        id=row["id"],
        name=row["name"],
        day_rate=_decimal_from_db(row["day_rate"]),
        month_rate=_decimal_from_db(row["month_rate"]),
        image=row["image"],
    )


def _order_from_row(row: sqlite3.Row, with_car: bool = False) -> Order:
    car = None
    if with_car and row["car_name"] is not None:
        car = Car(id=row["car_id"], name=row["car_name"])
    return Order(
        id=row["id"],
        car_id=row["car_id"],
        order_date=_date_from_db(row["order_date"]),
        pickup_date=_date_from_db(row["pickup_date"]),
        dropoff_date=_date_from_db(row["dropoff_date"]),
        pickup_location=row["pickup_location"],
        dropoff_location=row["dropoff_location"],
        car=car,
    )


class CarRepository:
    """Stores and loads cars."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def find_by_id(self, car_id: int) -> Car | None:
        """Return the car with its orders, or None if there is none."""
        row = self._conn.execute(
            f"SELECT {_CAR_COLUMNS} FROM cars WHERE id = ?", (car_id,)
        ).fetchone()
        if row is None:
            return None
        car = _car_from_row(row)
        rows = self._conn.execute(
            f"{_ORDER_SELECT} WHERE o.car_id = ? ORDER BY o.id", (car.id,)
        )
        car.orders = [_order_from_row(order_row) for order_row in rows]
        return car

    def find_all(self) -> list[Car]:
        """Return every car, without orders, in id order."""
        rows = self._conn.execute(f"SELECT {_CAR_COLUMNS} FROM cars ORDER BY id")
        return [_car_from_row(row) for row in rows]

    def create(self, car: Car) -> int:
        """Insert the car and return its new id."""
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO cars (name, day_rate, month_rate, image) VALUES (?, ?, ?, ?)",
                (car.name, float(car.day_rate), float(car.month_rate), car.image),
            )
        return cursor.lastrowid

    def update_by_id(self, car: Car) -> None:
        """Overwrite the stored car's fields that are set (non-empty, non-zero)."""
        changes: dict[str, object] = {}
        if car.name:
            changes["name"] = car.name
        if car.day_rate:
            changes["day_rate"] = float(car.day_rate)
        if car.month_rate:
            changes["month_rate"] = float(car.month_rate)
        if car.image:
            changes["image"] = car.image
        if not changes:
            return
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with self._conn:
            self._conn.execute(
                f"UPDATE cars SET {assignments} WHERE id = ?", (*changes.values(), car.id)
            )

    def delete_by_id(self, car: Car) -> None:
        """Delete the car; raises sqlite3.IntegrityError while orders refer to it."""
        with self._conn:
            self._conn.execute("DELETE FROM cars WHERE id = ?", (car.id,))


class OrderRepository:
    """Stores and loads orders."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def find_by_id(self, order_id: int) -> Order | None:
        """Return the order with its car's id and name, or None."""
        row = self._conn.execute(f"{_ORDER_SELECT} WHERE o.id = ?", (order_id,)).fetchone()
        return None if row is None else _order_from_row(row, with_car=True)

    def find_all(self) -> list[Order]:
        """Return every order with its car's id and name, in id order."""
        rows = self._conn.execute(f"{_ORDER_SELECT} ORDER BY o.id")
        return [_order_from_row(row, with_car=True) for row in rows]

    def create(self, order: Order) -> int:
        """Insert the order and return its new id."""
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO orders (car_id, order_date, pickup_date, dropoff_date,"
                " pickup_location, dropoff_location) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    order.car_id,
                    _date_to_db(order.order_date),
                    _date_to_db(order.pickup_date),
                    _date_to_db(order.dropoff_date),
                    order.pickup_location,
                    order.dropoff_location,
                ),
            )
        return cursor.lastrowid

    def update_by_id(self, order: Order) -> None:
        """Overwrite the stored order's fields that are set (non-empty, non-zero)."""
        changes: dict[str, object] = {}
        if order.car_id:
            changes["car_id"] = order.car_id
        for column in ("order_date", "pickup_date", "dropoff_date"):
            value = getattr(order, column)
            if value is not None:
                changes[column] = _date_to_db(value)
        if order.pickup_location:
            changes["pickup_location"] = order.pickup_location
        if order.dropoff_location:
            changes["dropoff_location"] = order.dropoff_location
        if not changes:
            return
        assignments = ", ".join(f"{column} = ?" for column in changes)
        with self._conn:
            self._conn.execute(
                f"UPDATE orders SET {assignments} WHERE id = ?", (*changes.values(), order.id)
            )

    def delete_by_id(self, order: Order) -> None:
        """Delete the order."""
        with self._conn:
            self._conn.execute("DELETE FROM orders WHERE id = ?", (order.id,))

    def find_overlapping(self, car_id: int, pickup_date: date, dropoff_date: date) -> Order | None:
        """Return one order of the car whose rental period overlaps the given one."""
        row = self._conn.execute(
            f"{_ORDER_SELECT} WHERE o.car_id = ? AND o.pickup_date < ? AND o.dropoff_date > ?"
            " LIMIT 1",
            (car_id, _date_to_db(dropoff_date), _date_to_db(pickup_date)),
        ).fetchone()
        return None if row is None else _order_from_row(row, with_car=True)