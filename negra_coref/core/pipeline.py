"""Corpus conversion from NEGRA export to CoNLL-X."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from ..io.conllx import ConllxWriter
from ..io.negra import NegraReader
from .coref import COMMENT_FEATURE, COREF_MARKER, CorefResolver
from .models import ConversionReport, Corpus
from .negra_ids import assign_ids
from .tree import Tree

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionConfig:
    keep_comments: bool = False
    marker: str = COREF_MARKER

    @classmethod
    def from_manager(cls, manager) -> "ConversionConfig":
        """Build a config from a ``ConfigManager``."""
        return cls(
            keep_comments=bool(manager.get("export.keep_comments", False)),
            marker=manager.get("coref.marker", COREF_MARKER),
        )


class CorpusConverter:
    """
    Three-pass conversion of a whole corpus.

    1. ``load``: number the nodes of every sentence.
    2. ``resolve``: resolve coreference markers across the corpus.
    3. ``strip`` and ``export``: drop comments and write CoNLL-X.

    Markers may point forward, so resolution only starts once every
    sentence has been loaded; nothing is written if resolution fails.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()
        self.resolver = CorefResolver(self.config.marker)

    def load(self, trees: Iterable[Tree]) -> Corpus:
        corpus = Corpus()
        for tree in trees:
            corpus.add(tree, assign_ids(tree))
        logger.info("Loaded %d sentences", len(corpus))
        return corpus

    def resolve(self, corpus: Corpus) -> None:
        self.resolver.resolve(corpus)

    def strip(self, corpus: Corpus) -> None:
        """Remove comments from terminals unless they are kept."""
        if self.config.keep_comments:
            return
        for tree, _ in corpus:
            for terminal in tree.terminals():
                tree[terminal].features.pop(COMMENT_FEATURE, None)

    def export(self, corpus: Corpus, output: TextIO) -> int:
        writer = ConllxWriter(output)
        writer.write_trees(corpus.trees)
        logger.info("Wrote %d sentences", writer.sentences_written)
        return writer.sentences_written

    def convert(self, source: TextIO, output: TextIO) -> ConversionReport:
        """Read ``source``, resolve coreference and write CoNLL-X to ``output``."""
        corpus = self.load(NegraReader(source))
        self.resolve(corpus)
        self.strip(corpus)
        self.export(corpus, output)
        return self.report(corpus)

    def report(self, corpus: Corpus) -> ConversionReport:
        stats = self.resolver.stats
        return ConversionReport(
            sentences=len(corpus),
            tokens=sum(sum(1 for _ in tree.terminals()) for tree in corpus.trees),
            nonterminals=sum(sum(1 for _ in tree.nonterminals()) - 1 for tree in corpus.trees),
            coref_markers=stats.markers,
            annotated_tokens=stats.annotated_terminals,
            forward_references=stats.forward_references,
            keep_comments=self.config.keep_comments,
        )
