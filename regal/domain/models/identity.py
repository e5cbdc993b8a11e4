from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IdentityContext:
    """Verified caller identity attached to a request by the authorization dependency."""

    subject_id: str
    subject_email: str
    token: str

    @property
    def owner_id(self) -> str:
        """Identifier used to scope every owner-filtered query."""
        return self.subject_id
