"""Domain records shared by the user service and the stores."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Role:
    """A named authorization level. Build with ``roles.role_from_name``."""
    name: str


@dataclass
class User:
    """One identity known to the system.

    ``id`` is assigned by the store on ``add`` and is ``None`` before that.
    ``roles`` keeps the order in which the roles were submitted.
    """
    id: Optional[int] = None
    name: str = ""
    provider: str = ""
    scheme: str = ""
    roles: List[Role] = field(default_factory=list)


@dataclass(frozen=True)
class RequestContext:
    """Per-request metadata handed to every store call."""
    correlation_id: Optional[str] = None
