"""
Declaration Lowering Mixin.
"""

from callswitch.errors import TransformError
from callswitch.ir.nodes import ActionDecl, Declaration, IRFile, ValueDecl
from callswitch.source import ast as src


class DeclarationMixin:
  """
  Lowers top-level bindings and actions, and whole files.
  """

  def transform_file(self, source: src.SourceFile) -> IRFile:
    return IRFile(source.path, tuple(self.transform_declaration(d) for d in source.declarations))

  def transform_declaration(self, decl: src.SourceNode) -> Declaration:
    if isinstance(decl, src.Binding):
      return ValueDecl(decl.name, self.transform_expr(decl.value), range=self.adapter.range_of(decl))
    if isinstance(decl, src.Action):
      return ActionDecl(self.transform_expr(decl.expr), range=self.adapter.range_of(decl))
    raise TransformError(f"Unsupported declaration: {type(decl).__name__}", self.adapter.range_of(decl))
