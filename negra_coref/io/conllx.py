"""CoNLL-X output."""

from __future__ import annotations

import re
from typing import Iterable, Optional, TextIO

from ..core.features import Features
from ..core.tree import Tree

EMPTY = "_"
# Characters that would split a FEATS value into columns or pairs.
FEATS_UNSAFE = re.compile(r"[\s|]+")


def _column(value: Optional[str]) -> str:
    if not value:
        return EMPTY
    return value


def _feats(features: Features) -> str:
    """FEATS column: values with whitespace and ``|`` runs replaced by ``_``."""
    safe = Features(
        (key, None if value is None else FEATS_UNSAFE.sub(EMPTY, value))
        for key, value in features.items()
    )
    return str(safe)


def format_tree(tree: Tree) -> str:
    """Render the terminals of ``tree`` as CoNLL-X lines, one token per line."""
    lines = []
    for terminal in tree.sorted_terminals():
        node = tree[terminal]
        row = (
            str(node.position),
            _column(node.form),
            _column(node.lemma),
            _column(node.label),
            _column(node.label),
            _feats(node.features),
            EMPTY,
            EMPTY,
            EMPTY,
            EMPTY,
        )
        lines.append("\t".join(row))
    return "\n".join(lines) + "\n"


class ConllxWriter:
    """Writes trees to a text stream, separating sentences by an empty line."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.sentences_written = 0

    def write_tree(self, tree: Tree) -> None:
        self.stream.write(format_tree(tree))
        self.stream.write("\n")
        self.sentences_written += 1

    def write_trees(self, trees: Iterable[Tree]) -> None:
        for tree in trees:
            self.write_tree(tree)
