"""Ordered feature maps with optional values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableMapping
from typing import Optional, Tuple

EMPTY = "_"


class Features(MutableMapping[str, Optional[str]]):
    """
    Insertion-ordered mapping from feature names to optional values.

    A key that is present with value ``None`` is a valid, distinct state
    (``"key" in features`` is True, ``features["key"]`` is None). The text
    form is ``key:value|key``, as used in the CoNLL-X FEATS column.
    """

    def __init__(self, items: Optional[Iterable[Tuple[str, Optional[str]]]] = None) -> None:
        self._data: dict[str, Optional[str]] = {}
        if items is not None:
            for key, value in items:
                self[key] = value

    @classmethod
    def from_string(cls, text: str) -> "Features":
        """Parse ``key:value|key`` into a feature map; ``_`` is empty."""
        features = cls()
        text = text.strip()
        if not text or text == EMPTY:
            return features
        for part in text.split("|"):
            if not part:
                continue
            key, sep, value = part.partition(":")
            features[key] = value if sep else None
        return features

    def __getitem__(self, key: str) -> Optional[str]:
        return self._data[key]

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        if not key:
            raise ValueError("Feature names must be non-empty")
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def has_value(self, key: str) -> bool:
        """Return True if the key is present and carries a value."""
        return self._data.get(key) is not None

    def __str__(self) -> str:
        if not self._data:
            return EMPTY
        return "|".join(
            key if value is None else f"{key}:{value}"
            for key, value in self._data.items()
        )

    def __repr__(self) -> str:
        return f"Features({list(self._data.items())!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Features):
            return list(self._data.items()) == list(other._data.items())
        return super().__eq__(other)
