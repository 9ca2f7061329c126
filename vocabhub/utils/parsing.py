"""Text parsing utilities for consistent text processing across the application."""

import re
import unicodedata
from datetime import datetime, timezone
from typing import Any, Optional


class TextParser:
    """
    Centralized text parsing utilities.

    Single source of truth for form field cleanup, search term
    sanitising and timestamp parsing.
    """

    # Characters with meaning inside a PostgREST or=(...) filter
    FILTER_RESERVED_PATTERN = re.compile(r'[,()]')

    # Whitespace normalization pattern
    WHITESPACE_PATTERN = re.compile(r'\s+')

    # Fractional seconds longer than datetime.fromisoformat accepts
    FRACTION_PATTERN = re.compile(r'\.(\d{6})\d+')

    @classmethod
    def normalize_unicode(cls, text: str) -> str:
        """
        Normalize text to NFC form for consistent Unicode handling.

        Prevents issues with characters like é being represented as
        either a single codepoint (NFC) or base + combining accent (NFD).

        Args:
            text: Input text

        Returns:
            NFC-normalized text
        """
        if not text:
            return ""
        return unicodedata.normalize('NFC', str(text))

    @classmethod
    def clean_field(cls, value: Any) -> str:
        """Trim and NFC-normalise a form field value."""
        if value is None:
            return ""
        return cls.normalize_unicode(str(value)).strip()

    @classmethod
    def sanitize_search_term(cls, keyword: Optional[str]) -> str:
        """
        Prepare a keyword for a server-side ``ilike`` search.

        Commas and parentheses would break the ``or`` filter syntax,
        so they are replaced by spaces; runs of whitespace collapse.

        Args:
            keyword: Raw user input

        Returns:
            Cleaned keyword, empty string when nothing is left
        """
        if not keyword:
            return ""
        text = cls.FILTER_RESERVED_PATTERN.sub(' ', cls.normalize_unicode(keyword))
        return cls.WHITESPACE_PATTERN.sub(' ', text).strip()

    @classmethod
    def parse_timestamp(cls, value: Any) -> Optional[datetime]:
        """
        Parse a timestamp as returned by Supabase.

        Accepts datetimes, ISO-8601 strings with a trailing ``Z`` and
        strings with more than six fractional digits.

        Args:
            value: Raw column value

        Returns:
            Timezone-aware datetime, or None if unparseable
        """
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        text = cls.FRACTION_PATTERN.sub(r'.\1', text)

        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
