"""Corpus container and conversion report models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Tuple

from pydantic import BaseModel, Field

from .negra_ids import IdentifierMap
from .tree import Tree


@dataclass(slots=True)
class Corpus:
    """All sentences of a treebank together with their identifier maps.

    Indexing is 0-based; coreference markers use 1-based sentence numbers.
    """

    trees: List[Tree] = field(default_factory=list)
    id_maps: List[IdentifierMap] = field(default_factory=list)

    def add(self, tree: Tree, ids: IdentifierMap) -> None:
        self.trees.append(tree)
        self.id_maps.append(ids)

    def __len__(self) -> int:
        return len(self.trees)

    def __getitem__(self, index: int) -> Tuple[Tree, IdentifierMap]:
        return self.trees[index], self.id_maps[index]

    def __iter__(self) -> Iterator[Tuple[Tree, IdentifierMap]]:
        return iter(zip(self.trees, self.id_maps))


@dataclass(slots=True)
class CorefStats:
    """Counters collected while resolving coreference markers."""

    markers: int = 0
    annotated_terminals: int = 0
    forward_references: int = 0


class ConversionReport(BaseModel):
    """Summary of one corpus conversion."""

    sentences: int = Field(default=0, ge=0)
    tokens: int = Field(default=0, ge=0)
    nonterminals: int = Field(default=0, ge=0)
    coref_markers: int = Field(default=0, ge=0, description="Coreference markers resolved")
    annotated_tokens: int = Field(default=0, ge=0, description="Coref feature writes on terminals")
    forward_references: int = Field(default=0, ge=0, description="Markers pointing to a later sentence")
    keep_comments: bool = False
    meta: Dict[str, str] = Field(default_factory=dict)

    def model_post_init(self, __context) -> None:
        """Add metadata after initialization"""
        if not self.meta:
            self.meta = {
                "generated_at": datetime.now(timezone.utc).isoformat(),
            }
