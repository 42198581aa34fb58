"""
Ordered field map.

The intermediate form shared by both transcoding directions: an
insertion-ordered mapping of dotted TxRep keys to string values.
"""

from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple
import logging

from ..runtime.errors import InvalidFieldError, MissingFieldError

logger = logging.getLogger(__name__)


class FieldMap:
    """
    Insertion-ordered ``key -> value`` map backing a TxRep document.

    ``put`` on an existing key overwrites the value in place, keeping the
    position of the first insertion. Parsing text relies on this: a later
    line with the same key replaces the earlier value.
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}

    def put(self, key: str, value) -> None:
        """
        Append or overwrite an entry.

        Args:
            key: Dotted TxRep key
            value: Value; non-strings are rendered with ``str``
        """
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._entries[key] = value if isinstance(value, str) else str(value)

    def get(self, key: str) -> Optional[str]:
        """
        Get a value with its inline comment stripped.

        Anything from the first ``(`` onward is a human annotation, so
        ``"100 (one hundred)"`` reads as ``"100"``.

        Args:
            key: Dotted TxRep key

        Returns:
            Value, or None when the key is absent
        """
        value = self._entries.get(key)
        if value is None:
            return None
        paren = value.find("(")
        if paren >= 0:
            value = value[:paren]
        return value.strip()

    def get_raw(self, key: str) -> Optional[str]:
        """Get a value exactly as stored, comments included."""
        return self._entries.get(key)

    def require(self, key: str) -> str:
        """
        Get a comment-stripped value that must be present.

        Raises:
            MissingFieldError: If the key is absent
        """
        value = self.get(key)
        if value is None:
            raise MissingFieldError(key)
        return value

    def require_raw(self, key: str) -> str:
        """Get a raw value that must be present; used for quoted strings."""
        value = self.get_raw(key)
        if value is None:
            raise MissingFieldError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries.items())

    def to_text(self) -> str:
        """Serialize as ``key: value`` lines joined by newlines, no trailing newline."""
        return "\n".join(f"{key}: {value}" for key, value in self._entries.items())

    @classmethod
    def from_text(cls, text: str) -> FieldMap:
        """
        Parse ``key: value`` lines.

        Blank lines are skipped. Each line is split on its first ``:`` and
        both sides are trimmed. Duplicate keys overwrite earlier values.

        Raises:
            InvalidFieldError: If a non-blank line has no ``:``
        """
        fields = cls()
        for number, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            key, sep, value = line.partition(":")
            if not sep:
                raise InvalidFieldError(f"line {number}", "expected 'key: value'")
            key = key.strip()
            if key in fields:
                logger.debug("Duplicate key %s on line %d overrides earlier value", key, number)
            fields.put(key, value.strip())
        return fields

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"FieldMap({len(self._entries)} entries)"


__all__ = ["FieldMap"]
