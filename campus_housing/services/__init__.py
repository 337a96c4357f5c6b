"""Service layer of the housing service."""
