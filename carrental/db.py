"""SQLite connection handling and schema creation."""

from __future__ import annotations

import sqlite3

DEFAULT_DATABASE = "carrental.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS cars (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name VARCHAR(50) NOT NULL,
    day_rate REAL NOT NULL,
    month_rate REAL NOT NULL,
    image VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    car_id INTEGER REFERENCES cars(id),
    order_date DATE NOT NULL,
    pickup_date DATE NOT NULL,
    dropoff_date DATE NOT NULL,
    pickup_location VARCHAR(50) NOT NULL,
    dropoff_location VARCHAR(50) NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_orders_car_id ON orders (car_id);
"""


def connect(path: str = DEFAULT_DATABASE) -> sqlite3.Connection:
    """Open the database at *path* with named rows and foreign keys enforced."""
    conn = sqlite3.connect(path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    """Create the cars and orders tables if they do not exist yet."""
    with conn:
        conn.executescript(_SCHEMA)