"""Cross-sentence coreference resolution.

Coreference links are stored in the ``comment`` of a node as tokens like
``R=coreferential.3:512``: the node is coreferent with node ``512`` of
sentence ``3``. Each link is resolved to the terminal positions of the
target and written onto every terminal dominated by the annotated node as
``coref=[(2,[4,5])]`` (0-based sentence index, 1-based token positions).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import CorefFeatureError, MarkerSyntaxError, UnresolvedReferenceError
from .features import Features
from .models import CorefStats, Corpus
from .tree import Tree

logger = logging.getLogger(__name__)

COREF_MARKER = "R=coreferential"
COMMENT_FEATURE = "comment"
COREF_FEATURE = "coref"

_NUMBER_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class CorefMarker:
    """A parsed ``prefix.sentence:node`` reference."""

    raw: str
    sentence_id: int
    node_id: str

    @property
    def sentence_index(self) -> int:
        return self.sentence_id - 1


def find_markers(comment: str, marker: str = COREF_MARKER) -> List[str]:
    """Return the whitespace-separated tokens of ``comment`` that contain ``marker``."""
    return [token for token in comment.split() if marker in token]


def parse_marker(
    token: str,
    *,
    sentence: Optional[int] = None,
    marker: str = COREF_MARKER,
) -> CorefMarker:
    """
    Parse a coreference marker token.

    The ``sentence:node`` reference is the ``.``-separated component that
    follows the one carrying the marker literal; anything after it is
    ignored.

    Args:
        token: Raw annotation token, e.g. ``R=coreferential.3:512``
        sentence: Sentence the token was found in, for error messages
        marker: Literal that identifies coreference markers

    Raises:
        MarkerSyntaxError: if the token is not a well-formed marker
    """
    components = token.split(".")
    anchor = next((i for i, part in enumerate(components) if marker in part), None)
    if anchor is None:
        raise MarkerSyntaxError(f"Not a {marker} marker", sentence=sentence, marker=token)

    if anchor + 1 >= len(components) or not components[anchor + 1]:
        raise MarkerSyntaxError("Missing sentence id and node id for coref", sentence=sentence, marker=token)

    parts = components[anchor + 1].split(":")
    if len(parts) != 2:
        raise MarkerSyntaxError(
            "Coreference annotation is expected to be sentence_id:node_id",
            sentence=sentence,
            marker=token,
        )

    sentence_text, node_id = parts
    if not _NUMBER_RE.fullmatch(sentence_text) or int(sentence_text) < 1:
        raise MarkerSyntaxError(
            f"Sentence id {sentence_text!r} is not a positive integer",
            sentence=sentence,
            marker=token,
        )
    if not node_id:
        raise MarkerSyntaxError("Missing node id", sentence=sentence, marker=token)

    return CorefMarker(raw=token, sentence_id=int(sentence_text), node_id=node_id)


def resolve_target(corpus: Corpus, ref: CorefMarker, *, sentence: Optional[int] = None) -> tuple[int, ...]:
    """Return the span of the node ``ref`` points to."""
    if ref.sentence_id > len(corpus):
        raise UnresolvedReferenceError(
            f"Sentence {ref.sentence_id} does not exist, corpus has {len(corpus)} sentences",
            sentence=sentence,
            marker=ref.raw,
        )
    tree, ids = corpus[ref.sentence_index]
    handle = ids.get(ref.node_id)
    if handle is None:
        raise UnresolvedReferenceError(
            f"No entry for node id {ref.node_id} in sentence {ref.sentence_id}",
            sentence=sentence,
            marker=ref.raw,
        )
    return tree.span(handle)


def format_coref(sentence_index: int, positions: Sequence[int]) -> str:
    """Render one ``(sentence,[positions])`` tuple."""
    return f"({sentence_index},[{','.join(str(p) for p in positions)}])"


def append_coref(features: Features, entry: str, *, sentence: Optional[int] = None, marker: Optional[str] = None) -> None:
    """Add a rendered tuple to the ``coref`` list in ``features``."""
    if COREF_FEATURE not in features:
        features[COREF_FEATURE] = f"[{entry}]"
        return

    previous = features.pop(COREF_FEATURE)
    if previous is None or not previous.endswith("]"):
        raise CorefFeatureError(
            f"Cannot extend coref feature {previous!r}",
            sentence=sentence,
            marker=marker,
        )
    features[COREF_FEATURE] = f"{previous[:-1]},{entry}]"


class CorefResolver:
    """
    Resolves coreference markers over a fully loaded corpus.

    Every identifier map of the corpus must exist before ``resolve`` is
    called, since markers may point to later sentences.
    """

    def __init__(self, marker: str = COREF_MARKER) -> None:
        self.marker = marker
        self.stats = CorefStats()

    def resolve(self, corpus: Corpus) -> None:
        """
        Annotate all terminals of ``corpus`` that take part in a coreference link.

        Only constituent comments carry markers; token comments are left alone.
        """
        for position, (tree, _) in enumerate(corpus, start=1):
            for handle in tree.nonterminals():
                comment = tree[handle].features.get(COMMENT_FEATURE)
                if not comment:
                    continue
                for token in find_markers(comment, self.marker):
                    self._apply(corpus, position, tree, handle, token)

        logger.info(
            "Resolved %d coreference markers, annotated %d terminals",
            self.stats.markers,
            self.stats.annotated_terminals,
        )

    def _apply(self, corpus: Corpus, position: int, tree: Tree, handle: int, token: str) -> None:
        ref = parse_marker(token, sentence=position, marker=self.marker)
        span = resolve_target(corpus, ref, sentence=position)
        entry = format_coref(ref.sentence_index, span)

        terminals = tree.descendant_terminals(handle)
        for terminal in terminals:
            append_coref(tree[terminal].features, entry, sentence=position, marker=token)

        self.stats.markers += 1
        self.stats.annotated_terminals += len(terminals)
        if ref.sentence_id > position:
            self.stats.forward_references += 1
        logger.debug("Sentence %d: %s -> %s on %d terminals", position, token, entry, len(terminals))


def resolve_corefs(corpus: Corpus, marker: str = COREF_MARKER) -> None:
    """Resolve every coreference marker in ``corpus`` in place."""
    CorefResolver(marker).resolve(corpus)
