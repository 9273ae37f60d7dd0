"""
Whole-Tree Source Rewriting.

Helper for ``AST_TRANSFORM`` extensions. Mirrors the leave-hook style of a
LibCST ``CSTTransformer``: children are rewritten first, then
``leave_<ClassName>(original_node, updated_node)`` is called if the subclass
defines it. Nodes are frozen, so every change produces a copy and the input
tree stays intact.
"""

from typing import Any

from callswitch.source.ast import SourceFile, SourceNode


class SourceRewriter:
  """
  Base class for post-parse tree rewrites.

  Example:
      class RenameLogger(SourceRewriter):
        def leave_Ident(self, original_node, updated_node):
          if updated_node.name == "log":
            return updated_node.model_copy(update={"name": "logger"})
          return updated_node
  """

  def rewrite(self, source: SourceFile) -> SourceFile:
    declarations = tuple(self.visit(decl) for decl in source.declarations)
    if all(a is b for a, b in zip(declarations, source.declarations)):
      return source
    return source.model_copy(update={"declarations": declarations})

  def visit(self, node: SourceNode) -> SourceNode:
    changes = {}
    for name in type(node).model_fields:
      value = getattr(node, name)
      new_value = self._visit_value(value)
      if new_value is not value:
        changes[name] = new_value
    updated = node.model_copy(update=changes) if changes else node

    leave = getattr(self, f"leave_{type(node).__name__}", None)
    if leave is None:
      return updated
    return leave(node, updated)

  def _visit_value(self, value: Any) -> Any:
    if isinstance(value, SourceNode):
      return self.visit(value)
    if isinstance(value, tuple) and any(isinstance(v, SourceNode) for v in value):
      items = tuple(self._visit_value(v) for v in value)
      if all(a is b for a, b in zip(items, value)):
        return value
      return items
    return value
