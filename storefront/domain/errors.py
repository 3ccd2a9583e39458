# storefront/domain/errors.py
from pydantic import ValidationError as PydanticValidationError


class StorefrontError(Exception):
    """Base class for every error raised by the catalog and cart services."""


class ValidationError(StorefrontError, ValueError):
    """Missing or invalid input."""

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        problems = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err["loc"]) or "body"
            problems.append(f"{field}: {err['msg']}")
        return cls("; ".join(problems))


class ConflictError(StorefrontError):
    """A write collided with a uniqueness constraint (e.g. duplicate product code)."""


class NotFoundError(StorefrontError, LookupError):
    """A product, cart or cart entry id did not resolve."""


class StoreError(StorefrontError):
    """The store failed for reasons unrelated to business rules."""
