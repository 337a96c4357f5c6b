from campus_housing.core.middleware import register_middlewares

__all__ = ["register_middlewares"]
