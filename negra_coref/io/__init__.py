"""Treebank readers and writers."""

from .conllx import ConllxWriter, format_tree
from .negra import NegraReader, read_export

__all__ = ["ConllxWriter", "format_tree", "NegraReader", "read_export"]
