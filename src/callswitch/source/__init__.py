"""
Source Package.

Boundary with the black-box front-end:
- ``ast``: the frozen, typed source model and its JSON loader.
- ``adapter``: read-only queries used while building IR.
- ``rewriter``: leave-hook base class for whole-tree extensions.
"""

from callswitch.source.adapter import SourceAdapter, natural_name
from callswitch.source.ast import SourceFile, load_source_file, parse_source
from callswitch.source.rewriter import SourceRewriter

__all__ = [
  "SourceAdapter",
  "SourceFile",
  "SourceRewriter",
  "load_source_file",
  "natural_name",
  "parse_source",
]
