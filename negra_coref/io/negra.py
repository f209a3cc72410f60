"""Reader for the NEGRA export format.

A sentence is a block of lines between ``#BOS <key>`` and ``#EOS <key>``,
one node per line::

    word  [lemma]  tag  morph  edge  parent  [secedge-label secedge-parent]*  [%% comment]

Lines whose word is ``#500``, ``#501``, ... describe constituents; every
other line is a token. Parent ``0`` is the virtual root.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List, Optional, TextIO, Union

from ..core.coref import COMMENT_FEATURE
from ..core.errors import ExportFormatError
from ..core.tree import NO_LABEL, ROOT_LABEL, Tree

logger = logging.getLogger(__name__)

MORPH_FEATURE = "morph"

FIELDS = tuple(range(6))
WORD, LEMMA, TAG, MORPH, EDGE, PARENT = FIELDS
EXPORT_NONTERMINAL = re.compile(r"^#([5-9][0-9][0-9]|[1-9][0-9]{3,})$")
COMMENT_SEP = "%%"


def split_comment(line: str) -> tuple[str, Optional[str]]:
    """Split a line into its content and the text after ``%%``, whitespace collapsed."""
    index = line.find(COMMENT_SEP)
    if index == -1:
        return line, None
    comment = " ".join(line[index + len(COMMENT_SEP):].split())
    return line[:index], comment or None


def export_split(line: str, *, sentence: Optional[str] = None) -> tuple[list[str], Optional[str]]:
    """
    Split a node line into fields and comment.

    A missing lemma column (format 3) is filled in with ``--``.

    Returns:
        (fields, comment) where fields has at least 6 elements
    """
    content, comment = split_comment(line)
    fields = content.split()
    if len(fields) < 5:
        raise ExportFormatError(f"Expected at least 5 columns: {line!r}", sentence=sentence)
    if len(fields) % 2:
        fields.insert(LEMMA, NO_LABEL)
    return fields, comment


def export_tree(block: List[str]) -> Tree:
    """Build a tree from the lines of one ``#BOS`` ... ``#EOS`` block."""
    header, bos_comment = split_comment(block[0])
    sentence_id = header.split()[1]
    tree = Tree(root_label=ROOT_LABEL, sentence_id=sentence_id, comment=bos_comment)

    handles = {"0": tree.root}
    parents = []
    position = 0
    for line in block[1:-1]:
        if not line.strip():
            continue
        fields, comment = export_split(line, sentence=sentence_id)
        match = EXPORT_NONTERMINAL.match(fields[WORD])
        if match:
            if match.group(1) in handles:
                raise ExportFormatError(f"Duplicate node id #{match.group(1)}", sentence=sentence_id)
            handle = tree.add_nonterminal(fields[TAG], edge=fields[EDGE])
            handles[match.group(1)] = handle
        else:
            position += 1
            lemma = None if fields[LEMMA] == NO_LABEL else fields[LEMMA]
            handle = tree.add_terminal(
                fields[WORD],
                fields[TAG],
                lemma=lemma,
                position=position,
                edge=fields[EDGE],
            )

        features = tree[handle].features
        if fields[MORPH] != NO_LABEL:
            features[MORPH_FEATURE] = fields[MORPH]
        if comment is not None:
            features[COMMENT_FEATURE] = comment
        parents.append((handle, fields[PARENT]))

    for handle, parent_id in parents:
        if parent_id not in handles:
            raise ExportFormatError(f"Unknown parent id {parent_id}", sentence=sentence_id)
        tree.attach(handles[parent_id], handle)

    tree.check()
    return tree


class NegraReader:
    """Iterate over the trees of a NEGRA export stream."""

    def __init__(self, source: Union[TextIO, Iterable[str]]):
        self.source = source

    def __iter__(self) -> Iterator[Tree]:
        seen = set()
        for sentence_id, block in self._blocks():
            if sentence_id in seen:
                raise ExportFormatError("Duplicate sentence id", sentence=sentence_id)
            seen.add(sentence_id)
            yield export_tree(block)

    def _blocks(self) -> Iterator[tuple[str, List[str]]]:
        """Yield (sentence id, lines) per ``#BOS`` ... ``#EOS`` block."""
        lines: List[str] = []
        sentence_id: Optional[str] = None
        for line in self.source:
            line = line.rstrip("\r\n")
            if line.startswith("#BOS"):
                if sentence_id is not None:
                    raise ExportFormatError(
                        f"Beginning of sentence marker while previous one still open: {line}",
                        sentence=sentence_id,
                    )
                fields = split_comment(line)[0].split()
                if len(fields) < 2:
                    raise ExportFormatError(f"Missing sentence id: {line!r}")
                sentence_id = fields[1]
                lines = [line]
            elif line.startswith("#EOS"):
                fields = line.split()
                if sentence_id is None:
                    raise ExportFormatError(f"End of sentence marker while none started: {line}")
                if len(fields) < 2 or fields[1] != sentence_id:
                    raise ExportFormatError(
                        f"Unexpected sentence id: start={sentence_id}, end={fields[1:2]}",
                        sentence=sentence_id,
                    )
                lines.append(line)
                yield sentence_id, lines
                sentence_id = None
            elif sentence_id is not None:
                lines.append(line)
            # other lines are ignored: #FORMAT x, %% comments, #BOT ... #EOT tables

        if sentence_id is not None:
            raise ExportFormatError("Input ended inside a sentence", sentence=sentence_id)


def read_export(source: Union[TextIO, Iterable[str]]) -> List[Tree]:
    """Read all trees from ``source``."""
    trees = list(NegraReader(source))
    logger.info("Read %d sentences", len(trees))
    return trees
