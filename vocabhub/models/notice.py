"""User-visible messages."""

from dataclasses import dataclass
from enum import Enum


class NoticeLevel(Enum):
    """Severity of a notice."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A message plus severity, rendered by the views."""

    level: NoticeLevel
    text: str

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR

    @classmethod
    def info(cls, text: str) -> "Notice":
        return cls(NoticeLevel.INFO, text)

    @classmethod
    def success(cls, text: str) -> "Notice":
        return cls(NoticeLevel.SUCCESS, text)

    @classmethod
    def warning(cls, text: str) -> "Notice":
        return cls(NoticeLevel.WARNING, text)

    @classmethod
    def error(cls, text: str) -> "Notice":
        return cls(NoticeLevel.ERROR, text)
