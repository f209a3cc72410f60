"""Fatal conversion errors."""

from __future__ import annotations

from typing import Optional, Union


class ConversionError(ValueError):
    """Base class for errors that abort a corpus conversion.

    Carries the sentence the error was detected in and, for coreference
    problems, the raw marker text, both of which end up in the message.
    """

    def __init__(
        self,
        message: str,
        *,
        sentence: Optional[Union[int, str]] = None,
        marker: Optional[str] = None,
    ) -> None:
        self.message = message
        self.sentence = sentence
        self.marker = marker
        super().__init__(self._render())

    def _render(self) -> str:
        context = []
        if self.sentence is not None:
            context.append(f"sentence {self.sentence}")
        if self.marker is not None:
            context.append(f"marker {self.marker!r}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class ExportFormatError(ConversionError):
    """Malformed NEGRA export input."""


class TreeStructureError(ConversionError):
    """A tree violates a structural invariant."""


class MarkerSyntaxError(ConversionError):
    """A coreference marker does not follow ``prefix.sentence:node``."""


class UnresolvedReferenceError(ConversionError):
    """A marker points to a sentence or node that does not exist."""


class CorefFeatureError(ConversionError):
    """An existing ``coref`` feature cannot be extended."""
