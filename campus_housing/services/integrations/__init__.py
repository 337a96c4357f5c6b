from campus_housing.services.integrations.dining_client import DiningClient, UpstreamResponse

__all__ = ["DiningClient", "UpstreamResponse"]
