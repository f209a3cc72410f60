"""NEGRA export node identifiers.

The export format numbers the root ``0``, terminals ``1..N`` and
constituents from ``500`` upwards in the order in which they become
complete. Coreference markers refer to nodes by these numbers, so the
numbering has to be recomputed for every tree before any marker in the
corpus can be resolved.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict

from .errors import TreeStructureError
from .tree import Tree

logger = logging.getLogger(__name__)

IdentifierMap = Dict[str, int]

ROOT_ID = "0"
FIRST_NONTERMINAL_ID = 500


def assign_ids(tree: Tree) -> IdentifierMap:
    """
    Map NEGRA node ids to node handles of ``tree``.

    Nonterminals are numbered from a work list: parents of preterminal-only
    constituents are queued at the tail, nodes are taken from the head, and
    a parent whose children have all been numbered is pushed back onto the
    head so it is numbered before constituents that were queued earlier.

    Raises:
        TreeStructureError: if a nonterminal never becomes complete.
    """
    ids: IdentifierMap = {ROOT_ID: tree.root}
    resolved = set()
    queue: deque[int] = deque()

    for number, terminal in enumerate(tree.sorted_terminals(), start=1):
        ids[str(number)] = terminal
        resolved.add(terminal)
        parent = tree.parent(terminal)
        if parent is not None and all(tree.is_terminal(child) for child in tree.children(parent)):
            queue.append(parent)

    next_id = FIRST_NONTERMINAL_ID
    while queue:
        node = queue.popleft()
        if node in resolved or node == tree.root:
            continue
        ids[str(next_id)] = node
        resolved.add(node)
        next_id += 1

        parent = tree.parent(node)
        if parent is not None and all(child in resolved for child in tree.children(parent)):
            queue.appendleft(parent)

    missing = [node for node in tree.nonterminals() if node != tree.root and node not in resolved]
    if missing:
        labels = ", ".join(f"{node}:{tree[node].label}" for node in missing)
        raise TreeStructureError(f"No id could be assigned to nonterminals {labels}", sentence=tree.sentence_id)

    logger.debug(
        "Assigned %d ids in sentence %s (%d nonterminals)",
        len(ids),
        tree.sentence_id,
        next_id - FIRST_NONTERMINAL_ID,
    )
    return ids
