"""
Expression Lowering Mixin.

Fixed, built-in lowering rules for every source expression that is not a
call on a resolved symbol: constants, identifiers, lambdas, bindings,
conditionals, sequences, records, operators and applications of function
values. None of these consult extensions.
"""

from callswitch.errors import TransformError
from callswitch.ir import types as T
from callswitch.ir.nodes import (
  Apply,
  Expr,
  Identifier,
  IfThenElse,
  Lambda,
  Let,
  Literal,
  ObjectExpr,
  Operation,
  Sequential,
)
from callswitch.source import ast as src

# Source spellings that differ from the IR operator set
_BINARY_ALIASES = {"=": "==", "<>": "!=", "&&": "and", "||": "or", "&&&": "&", "|||": "|", "^^^": "^"}
_UNARY_ALIASES = {"~-": "-", "~+": "+", "~~~": "~"}


class ExpressionMixin:
  """
  Assumed attributes on self:
      adapter (SourceAdapter): Source metadata queries.
      transform_expr (callable): Recursive dispatch.
  """

  def transform_Const(self, node: src.Const) -> Expr:
    return Literal(node.value, type=self.adapter.type_of(node), range=self.adapter.range_of(node))

  def transform_Ident(self, node: src.Ident) -> Expr:
    return Identifier(node.name, type=self.adapter.type_of(node), range=self.adapter.range_of(node))

  def transform_Function(self, node: src.Function) -> Expr:
    body = self.transform_expr(node.body)
    fn_type = self.adapter.type_of(node)
    if not isinstance(fn_type, T.FunctionType):
      fn_type = T.FunctionType(tuple(self.adapter.to_type(p.type) for p in node.params), body.type)
    return Lambda(
      tuple(p.name for p in node.params),
      body,
      type=fn_type,
      range=self.adapter.range_of(node),
    )

  def transform_Invoke(self, node: src.Invoke) -> Expr:
    func = self.transform_expr(node.func)
    args = tuple(self.transform_expr(a) for a in node.args)
    return Apply(func, args, type=self.adapter.type_of(node), range=self.adapter.range_of(node))

  def transform_LetIn(self, node: src.LetIn) -> Expr:
    return Let(
      node.name,
      self.transform_expr(node.value),
      self.transform_expr(node.body),
      type=self.adapter.type_of(node),
      range=self.adapter.range_of(node),
    )

  def transform_Conditional(self, node: src.Conditional) -> Expr:
    return IfThenElse(
      self.transform_expr(node.condition),
      self.transform_expr(node.then_branch),
      self.transform_expr(node.else_branch),
      type=self.adapter.type_of(node),
      range=self.adapter.range_of(node),
    )

  def transform_Sequence(self, node: src.Sequence) -> Expr:
    if not node.exprs:
      raise TransformError("Empty sequence expression", self.adapter.range_of(node))
    return Sequential(
      tuple(self.transform_expr(e) for e in node.exprs),
      type=self.adapter.type_of(node),
      range=self.adapter.range_of(node),
    )

  def transform_Record(self, node: src.Record) -> Expr:
    return ObjectExpr(
      tuple((f.name, self.transform_expr(f.value)) for f in node.fields),
      type=self.adapter.type_of(node),
      range=self.adapter.range_of(node),
    )

  def transform_BinaryOp(self, node: src.BinaryOp) -> Expr:
    operator = _BINARY_ALIASES.get(node.operator, node.operator)
    operands = (self.transform_expr(node.left), self.transform_expr(node.right))
    return self._operation(node, operator, operands)

  def transform_UnaryOp(self, node: src.UnaryOp) -> Expr:
    operator = _UNARY_ALIASES.get(node.operator, node.operator)
    return self._operation(node, operator, (self.transform_expr(node.operand),))

  def _operation(self, node: src.SourceExprBase, operator: str, operands) -> Expr:
    try:
      return Operation(operator, operands, type=self.adapter.type_of(node), range=self.adapter.range_of(node))
    except ValueError as e:
      raise TransformError(str(e), self.adapter.range_of(node))
