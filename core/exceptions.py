"""
Business errors raised by the domain services.

They carry no HTTP knowledge; `core.error_handlers` maps them to responses.
"""

from typing import Any, Optional


class DomainError(Exception):
    """Base class for every recoverable business error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """A targeted or referenced entity id does not exist."""

    def __init__(self, kind: str, entity_id: Any):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind}({entity_id}) not found")


class ConflictError(DomainError):
    """Uniqueness or business-rule violation on otherwise well-formed input."""


class InvalidSortError(DomainError):
    """A sort parameter names an unknown property or an unknown direction."""

    def __init__(self, prop: str, kind: str, direction: Optional[str] = None):
        self.prop = prop
        self.kind = kind
        self.direction = direction
        if direction is None:
            message = f"No property '{prop}' found for type '{kind}'"
        else:
            message = f"Invalid sort direction '{direction}' for property '{prop}', expected 'asc' or 'desc'"
        super().__init__(message)
