"""
Base Transformer.

Provides the state shared by the transform mixins (options, adapter,
resolver) and the dispatch from source node classes to their
``transform_<ClassName>`` methods.
"""

from typing import Any, List, Optional

from callswitch.errors import TransformError
from callswitch.ir.nodes import Expr
from callswitch.plugins.registry import PluginRegistry
from callswitch.source.adapter import SourceAdapter
from callswitch.source.ast import SourceExprBase
from callswitch.tracer import TraceLogger
from callswitch.transforms.resolution import CallResolver, Resolution


class BaseTransformer:
  """
  Foundation of the source-to-IR walk.

  The walk is depth-first and single-threaded; the transformer itself only
  accumulates the list of resolutions made so far.
  """

  def __init__(
    self,
    options: Any,
    registry: PluginRegistry,
    builtins: Any = None,
    tracer: Optional[TraceLogger] = None,
    path: Optional[str] = None,
  ):
    """
    Args:
        options: The frozen ``CompilerOptions`` of the run.
        registry: Extensions for the run, already frozen.
        builtins: Last-resort call-replacement handler.
        tracer: Trace logger of the run.
        path: Source path, attached to every IR range.
    """
    self.options = options
    self.adapter = SourceAdapter(path)
    self.resolver = CallResolver(options, registry, builtins, tracer)
    self.resolutions: List[Resolution] = []

  def transform_expr(self, node: SourceExprBase) -> Expr:
    method = getattr(self, f"transform_{type(node).__name__}", None)
    if method is None:
      raise TransformError(f"Unsupported source node: {type(node).__name__}", self.adapter.range_of(node))
    return method(node)
