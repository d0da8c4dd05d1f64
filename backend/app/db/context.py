"""Request context for travel access checks."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """Request context containing the caller's identity.

    Used to scope travel listings and to check travel ownership.
    """

    user_id: UUID
