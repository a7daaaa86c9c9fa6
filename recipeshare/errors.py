"""Exceptions raised by the recipe repository and its collaborators."""


class RecipeError(Exception):
    """Base class for all application level failures."""


class ValidationError(RecipeError):
    """A required recipe field is missing or malformed."""


class NotFound(RecipeError):
    """A recipe record or a stored asset does not exist."""


class Unauthorized(RecipeError):
    """The requester does not own the recipe being modified."""


class StorageUnavailable(RecipeError):
    """A backing store is unreachable or has not been configured."""


class GenerationFailure(RecipeError):
    """The AI backend failed to produce a usable answer."""


__all__ = [
    "GenerationFailure",
    "NotFound",
    "RecipeError",
    "StorageUnavailable",
    "Unauthorized",
    "ValidationError",
]
