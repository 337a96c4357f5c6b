"""Campus housing service: dorms, rooms and student room assignments."""

__version__ = "1.0.0"
