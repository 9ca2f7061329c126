"""Identity and user profile models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..utils.parsing import TextParser


@dataclass(frozen=True)
class Identity:
    """The signed-in user."""

    id: str
    email: str


@dataclass(frozen=True)
class UserProfile:
    """A row of the ``profiles`` table."""

    id: Any
    email: str
    name: str = ""
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name or self.email

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "UserProfile":
        return cls(
            id=row.get("id"),
            email=str(row.get("email") or ""),
            name=str(row.get("name") or row.get("full_name") or ""),
            created_at=TextParser.parse_timestamp(row.get("created_at")),
        )
