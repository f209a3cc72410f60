"""Trees, node numbering and coreference resolution."""

from .coref import COREF_MARKER, CorefMarker, CorefResolver, parse_marker, resolve_corefs
from .errors import (
    ConversionError,
    CorefFeatureError,
    ExportFormatError,
    MarkerSyntaxError,
    TreeStructureError,
    UnresolvedReferenceError,
)
from .features import Features
from .models import ConversionReport, Corpus
from .negra_ids import assign_ids
from .tree import Node, Tree

__all__ = [
    "COREF_MARKER",
    "CorefMarker",
    "CorefResolver",
    "parse_marker",
    "resolve_corefs",
    "ConversionError",
    "CorefFeatureError",
    "ExportFormatError",
    "MarkerSyntaxError",
    "TreeStructureError",
    "UnresolvedReferenceError",
    "Features",
    "ConversionReport",
    "Corpus",
    "assign_ids",
    "Node",
    "Tree",
]
