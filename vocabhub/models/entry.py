"""Vocabulary entry and audio upload models."""

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..utils.parsing import TextParser


@dataclass(frozen=True)
class VocabularyEntry:
    """One vocabulary record as stored in the ``vocab`` table."""

    id: Any
    word: str
    meaning: str
    category: str
    audio_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_audio(self) -> bool:
        return bool(self.audio_url)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "VocabularyEntry":
        """
        Build an entry from a table row.

        Args:
            row: Row dictionary with columns id, word, meaning, cat, sound, created_at

        Returns:
            VocabularyEntry
        """
        return cls(
            id=row.get("id"),
            word=str(row.get("word") or ""),
            meaning=str(row.get("meaning") or ""),
            category=str(row.get("cat") or ""),
            audio_url=row.get("sound") or None,
            created_at=TextParser.parse_timestamp(row.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        """Column dictionary for an insert (server assigns the id)."""
        created = self.created_at or datetime.now(timezone.utc)
        return {
            "word": self.word,
            "meaning": self.meaning,
            "cat": self.category,
            "sound": self.audio_url,
            "created_at": created.isoformat(),
        }


def derive_categories(rows: List[Mapping[str, Any]]) -> List[str]:
    """Sorted distinct ``cat`` values of the given rows."""
    return sorted({str(row["cat"]) for row in rows if row.get("cat")})


@dataclass
class AudioUpload:
    """An audio file picked by the user, held in memory until upload."""

    filename: str
    data: bytes = field(repr=False)
    content_type: str = ""

    def __post_init__(self) -> None:
        if not self.content_type:
            guessed, _ = mimetypes.guess_type(self.filename)
            self.content_type = guessed or "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_audio(self) -> bool:
        return self.content_type.startswith("audio/")
