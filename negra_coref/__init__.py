"""NEGRA export to CoNLL-X conversion with cross-sentence coreference."""

__version__ = "0.1.0"

from .core import (
    COREF_MARKER,
    ConversionError,
    ConversionReport,
    Corpus,
    CorefResolver,
    Features,
    Tree,
    assign_ids,
    resolve_corefs,
)
from .core.pipeline import ConversionConfig, CorpusConverter
from .io import ConllxWriter, NegraReader, read_export

__all__ = [
    "COREF_MARKER",
    "ConversionError",
    "ConversionReport",
    "Corpus",
    "CorefResolver",
    "Features",
    "Tree",
    "assign_ids",
    "resolve_corefs",
    "ConversionConfig",
    "CorpusConverter",
    "ConllxWriter",
    "NegraReader",
    "read_export",
]
