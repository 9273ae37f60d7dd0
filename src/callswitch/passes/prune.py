"""
Pruning of Untyped Empty Objects.

An empty object literal with no type information has no observable effect
when it sits in statement position, so it is dropped. Typed empty objects
(e.g. a stateless ``System.Random`` placeholder) are kept: their type is what
later code relies on.
"""

from callswitch.ir import types as T
from callswitch.ir.nodes import ActionDecl, Expr, IRFile, ObjectExpr, Sequential, ValueDecl, map_children


def is_untyped_empty_object(expr: Expr) -> bool:
  return isinstance(expr, ObjectExpr) and not expr.fields and isinstance(expr.type, T.AnyType)


def _prune_expr(expr: Expr) -> Expr:
  expr = map_children(expr, _prune_expr)
  if isinstance(expr, Sequential):
    *init, last = expr.exprs
    kept = tuple(e for e in init if not is_untyped_empty_object(e))
    if len(kept) == len(init):
      return expr
    if not kept:
      return last
    return Sequential((*kept, last), type=expr.type, range=expr.range)
  return expr


def prune_untyped_empty_objects(ir_file: IRFile) -> IRFile:
  """
  Returns a new file without untyped empty objects in statement position:
  top-level actions and non-final elements of sequences.
  """
  declarations = []
  for decl in ir_file.declarations:
    if isinstance(decl, ActionDecl):
      if is_untyped_empty_object(decl.expr):
        continue
      declarations.append(ActionDecl(_prune_expr(decl.expr), range=decl.range))
    elif isinstance(decl, ValueDecl):
      declarations.append(ValueDecl(decl.name, _prune_expr(decl.value), range=decl.range))
    else:
      declarations.append(decl)
  return IRFile(ir_file.path, tuple(declarations))
