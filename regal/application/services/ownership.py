"""Owner-based authorization shared by every owned resource."""

from __future__ import annotations

from typing import Optional, Protocol

from ...domain.errors import Forbidden, NotFound


class OwnedResource(Protocol):
    owner_id: str


def authorize_mutation(resource_owner_id: str, caller_id: str, message: Optional[str] = None) -> None:
    """Allow only the recorded owner; exact identifier equality, no delegation."""
    if resource_owner_id != caller_id:
        raise Forbidden(message)


def explain_scoped_miss(
    existing: Optional[OwnedResource],
    caller_id: str,
    not_found_message: str,
    forbidden_message: str,
) -> None:
    """Raise the right error after an owner-scoped write matched nothing.

    Existence is reported before ownership: an absent resource is ``NotFound``,
    a resource held by someone else is ``Forbidden``.
    """
    if existing is None:
        raise NotFound(not_found_message)
    authorize_mutation(existing.owner_id, caller_id, forbidden_message)
    # Owned by the caller yet unmatched: it disappeared between the two calls.
    raise NotFound(not_found_message)
