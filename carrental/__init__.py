"""Car rental service: cars, orders and booking validation behind a JSON API."""

__version__ = "0.1.0"