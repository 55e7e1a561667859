"""FoodieTrust: food discovery backend (AI gateway, vendor aggregation, reviews)."""

__version__ = "1.0.0"
