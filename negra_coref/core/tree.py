"""Constituency trees with integer node handles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from .errors import TreeStructureError
from .features import Features

ROOT_LABEL = "VROOT"
NO_LABEL = "--"


@dataclass(eq=False)
class Node:
    """A single tree node.

    Terminals carry a form and a 1-based ``position``; nonterminals have
    ``position`` set to None.
    """

    label: str
    edge: str = NO_LABEL
    form: Optional[str] = None
    lemma: Optional[str] = None
    position: Optional[int] = None
    features: Features = field(default_factory=Features)

    @property
    def is_terminal(self) -> bool:
        return self.position is not None


class Tree:
    """
    One sentence as a rooted, ordered tree.

    Nodes are addressed by integer handles in insertion order; the root is
    always handle 0. Only feature maps are expected to change once a tree
    has been built.
    """

    def __init__(
        self,
        root_label: str = ROOT_LABEL,
        sentence_id: Optional[str] = None,
        comment: Optional[str] = None,
    ) -> None:
        self.sentence_id = sentence_id
        self.comment = comment
        self._nodes: list[Node] = []
        self._parents: dict[int, int] = {}
        self._children: dict[int, list[int]] = {}
        self.root = self._add(Node(label=root_label))

    # ------------------------------------------------------------------
    # Construction

    def _add(self, node: Node) -> int:
        handle = len(self._nodes)
        self._nodes.append(node)
        self._children[handle] = []
        return handle

    def add_terminal(
        self,
        form: str,
        pos: str,
        *,
        lemma: Optional[str] = None,
        position: Optional[int] = None,
        edge: str = NO_LABEL,
    ) -> int:
        """Add a token; positions default to the next free 1-based index."""
        if position is None:
            position = sum(1 for _ in self.terminals()) + 1
        return self._add(Node(label=pos, edge=edge, form=form, lemma=lemma, position=position))

    def add_nonterminal(self, label: str, *, edge: str = NO_LABEL) -> int:
        return self._add(Node(label=label, edge=edge))

    def attach(self, parent: int, child: int) -> None:
        """Append ``child`` to the children of ``parent``."""
        if child == self.root:
            raise TreeStructureError("The root cannot have a parent", sentence=self.sentence_id)
        if child in self._parents:
            raise TreeStructureError(
                f"Node {child} already attached to {self._parents[child]}",
                sentence=self.sentence_id,
            )
        if self._nodes[parent].is_terminal:
            raise TreeStructureError(
                f"Terminal {parent} cannot dominate other nodes",
                sentence=self.sentence_id,
            )
        self._parents[child] = parent
        self._children[parent].append(child)

    # ------------------------------------------------------------------
    # Navigation

    def __getitem__(self, handle: int) -> Node:
        return self._nodes[handle]

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes(self) -> Iterator[int]:
        return iter(range(len(self._nodes)))

    def terminals(self) -> Iterator[int]:
        return (handle for handle, node in enumerate(self._nodes) if node.is_terminal)

    def nonterminals(self) -> Iterator[int]:
        return (handle for handle, node in enumerate(self._nodes) if not node.is_terminal)

    def is_terminal(self, handle: int) -> bool:
        return self._nodes[handle].is_terminal

    def parent(self, handle: int) -> Optional[int]:
        return self._parents.get(handle)

    def children(self, handle: int) -> list[int]:
        return list(self._children[handle])

    def descendant_terminals(self, handle: int) -> list[int]:
        """Terminals dominated by ``handle`` (itself for a terminal), in position order."""
        found = []
        agenda = [handle]
        while agenda:
            current = agenda.pop()
            if self._nodes[current].is_terminal:
                found.append(current)
            else:
                agenda.extend(self._children[current])
        found.sort(key=lambda terminal: self._nodes[terminal].position)
        return found

    def span(self, handle: int) -> tuple[int, ...]:
        """Sorted 1-based positions of the terminals dominated by ``handle``."""
        return tuple(self._nodes[t].position for t in self.descendant_terminals(handle))

    def sorted_terminals(self) -> list[int]:
        return sorted(self.terminals(), key=lambda terminal: self.span(terminal))

    # ------------------------------------------------------------------
    # Validation

    def check(self) -> None:
        """Raise TreeStructureError unless the tree is connected and sound."""
        # Nodes have at most one parent, so a cycle shows up as unreachable nodes.
        reachable = set()
        agenda = [self.root]
        while agenda:
            current = agenda.pop()
            reachable.add(current)
            agenda.extend(self._children[current])

        unreachable = [handle for handle in self.nodes() if handle not in reachable]
        if unreachable:
            raise TreeStructureError(
                f"Nodes not reachable from the root: {unreachable}",
                sentence=self.sentence_id,
            )

        for handle in self.nonterminals():
            if not self._children[handle]:
                raise TreeStructureError(
                    f"Nonterminal {handle} ({self._nodes[handle].label}) dominates no terminals",
                    sentence=self.sentence_id,
                )

        positions = sorted(self._nodes[t].position for t in self.terminals())
        if positions != list(range(1, len(positions) + 1)):
            raise TreeStructureError(
                f"Terminal positions are not 1..{len(positions)}: {positions}",
                sentence=self.sentence_id,
            )

    def __repr__(self) -> str:
        words = " ".join(self._nodes[t].form or "" for t in self.sorted_terminals())
        return f"Tree(sentence_id={self.sentence_id!r}, words={words!r})"
