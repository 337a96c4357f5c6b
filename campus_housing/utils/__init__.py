from campus_housing.utils.slug_utils import SlugHelper, UniqueUsernameGenerator

__all__ = ["SlugHelper", "UniqueUsernameGenerator"]
