"""
Python Target Emitter.

Synthesizes Python source from the IR via LibCST.

* Top-level lambda bindings become ``def`` statements; other bindings become
  assignments. ``Let`` / ``Sequential`` / ``Set`` in statement position are
  flattened into statements.
* In expression position (lambda bodies, arguments) bindings use assignment
  expressions: ``((x := v), body)[-1]``.
* Raw-emit nodes are substituted positionally and re-parsed with LibCST;
  compound arguments and compound results used as operands are wrapped in
  parentheses here, never in the IR.
* Modules referenced by ``Import`` nodes and raw-emit ``imports`` are
  imported at the top of the file.
* Member names that are Python keywords (or not identifiers at all) are
  accessed through ``getattr`` / ``setattr`` so the member itself is kept.
* In script format, the declarations from the first action onwards move into
  ``main()`` in their original order.
"""

import keyword
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Set as SetType

import libcst as cst

from callswitch.emit.base import TargetEmitter
from callswitch.emit.template import substitute
from callswitch.enums import ModuleFormat
from callswitch.errors import EmissionError
from callswitch.ir.nodes import (
  ActionDecl,
  Apply,
  Emit,
  Expr,
  Get,
  Identifier,
  IfThenElse,
  Import,
  IRFile,
  Lambda,
  Let,
  Literal,
  ObjectExpr,
  Operation,
  Sequential,
  Set,
  ValueDecl,
  Wrapped,
)

_BINARY = {
  "+": cst.Add,
  "-": cst.Subtract,
  "*": cst.Multiply,
  "/": cst.Divide,
  "//": cst.FloorDivide,
  "%": cst.Modulo,
  "**": cst.Power,
  "&": cst.BitAnd,
  "|": cst.BitOr,
  "^": cst.BitXor,
}
_COMPARISON = {
  "==": cst.Equal,
  "!=": cst.NotEqual,
  "<": cst.LessThan,
  "<=": cst.LessThanEqual,
  ">": cst.GreaterThan,
  ">=": cst.GreaterThanEqual,
}
_BOOLEAN = {"and": cst.And, "or": cst.Or}
_UNARY = {"-": cst.Minus, "+": cst.Plus, "not": cst.Not, "~": cst.BitInvert}

_COMPOUND = (
  cst.BinaryOperation,
  cst.BooleanOperation,
  cst.Comparison,
  cst.UnaryOperation,
  cst.IfExp,
  cst.Lambda,
  cst.NamedExpr,
  cst.Tuple,
)

_MAIN_GUARD = 'if __name__ == "__main__":\n    main()\n'


@dataclass(frozen=True)
class _Sink:
  """Where the value of a statement-position expression goes."""

  kind: str  # "assign" | "return" | "discard"
  name: Optional[str] = None


_RETURN = _Sink("return")
_DISCARD = _Sink("discard")


def safe_name(name: str) -> str:
  """Maps a source identifier onto a valid, non-reserved Python name."""
  clean = re.sub(r"\W", "_", name)
  if not clean or clean[0].isdigit():
    clean = f"_{clean}"
  if keyword.iskeyword(clean):
    clean = f"{clean}_"
  return clean


def _wrap(node: cst.BaseExpression) -> cst.BaseExpression:
  return node.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])


def _parenthesize(node: cst.BaseExpression) -> cst.BaseExpression:
  if isinstance(node, _COMPOUND) and not node.lpar:
    return _wrap(node)
  return node


def _attribute_target(node: cst.BaseExpression) -> cst.BaseExpression:
  # `5.real` lexes as a malformed float
  if isinstance(node, cst.Integer) and not node.lpar:
    return _wrap(node)
  return _parenthesize(node)


def _plain_member(name: str) -> bool:
  """Whether ``name`` can be spelled as ``obj.name`` without renaming."""
  return name.isidentifier() and not keyword.iskeyword(name)


def _dotted(parts: List[str]) -> cst.BaseExpression:
  node: cst.BaseExpression = cst.Name(safe_name(parts[0]))
  for part in parts[1:]:
    node = cst.Attribute(value=node, attr=cst.Name(safe_name(part)))
  return node


def _index_last(node: cst.BaseExpression) -> cst.Subscript:
  minus_one = cst.UnaryOperation(operator=cst.Minus(), expression=cst.Integer("1"))
  return cst.Subscript(value=node, slice=[cst.SubscriptElement(slice=cst.Index(value=minus_one))])


class PythonEmitter(TargetEmitter):
  """
  Renders an ``IRFile`` as a Python module.
  """

  def __init__(self, options=None):
    """
    Args:
        options: ``CompilerOptions`` of the run; only ``module_format`` is read.
    """
    self.module_format = options.module_format if options is not None else ModuleFormat.MODULE
    self._imports: SetType[str] = set()
    self._render_ctx = cst.Module(body=[])

  # --- Module Level ---

  def emit(self, ir_file: IRFile) -> str:
    return self.emit_module(ir_file).code

  def emit_module(self, ir_file: IRFile) -> cst.Module:
    self._imports = set()
    body: List[cst.BaseStatement] = []
    actions: List[cst.BaseStatement] = []
    script = self.module_format == ModuleFormat.SCRIPT
    in_main = False

    for decl in ir_file.declarations:
      if isinstance(decl, ValueDecl):
        stmts = self._value_decl(decl)
      elif isinstance(decl, ActionDecl):
        stmts = self.statements(decl.expr, _DISCARD)
        in_main = script
      else:
        raise EmissionError(f"Unsupported declaration: {type(decl).__name__}", decl.range)
      # everything from the first action on keeps its order inside main()
      (actions if in_main else body).extend(stmts)

    if actions:
      main_def = cst.FunctionDef(
        name=cst.Name("main"),
        params=cst.Parameters(),
        body=cst.IndentedBlock(body=actions),
      )
      body.extend([main_def, cst.parse_statement(_MAIN_GUARD)])

    imports = [cst.parse_statement(f"import {module}\n") for module in sorted(self._imports)]
    return cst.Module(body=[*imports, *body])

  def render(self, node: cst.CSTNode) -> str:
    """Source text of a detached LibCST node."""
    return self._render_ctx.code_for_node(node)

  def emit_expression(self, expr: Expr) -> str:
    """Target text of a single IR expression. Imports are not rendered."""
    return self.render(self.expression(expr))

  # --- Statements ---

  def _value_decl(self, decl: ValueDecl) -> List[cst.BaseStatement]:
    if isinstance(decl.value, Lambda):
      return [self._function_def(decl.name, decl.value)]
    return self.statements(decl.value, _Sink("assign", decl.name))

  def _function_def(self, name: str, fn: Lambda) -> cst.FunctionDef:
    return cst.FunctionDef(
      name=cst.Name(safe_name(name)),
      params=self._parameters(fn.params),
      body=self._block(self.statements(fn.body, _RETURN)),
    )

  def _block(self, stmts: List[cst.BaseStatement]) -> cst.IndentedBlock:
    return cst.IndentedBlock(body=stmts or [cst.SimpleStatementLine(body=[cst.Pass()])])

  def statements(self, expr: Expr, sink: _Sink) -> List[cst.BaseStatement]:
    """Lowers ``expr`` into statements delivering its value to ``sink``."""
    if isinstance(expr, Let):
      return self.statements(expr.value, _Sink("assign", expr.name)) + self.statements(expr.body, sink)

    if isinstance(expr, Sequential):
      stmts: List[cst.BaseStatement] = []
      for item in expr.exprs[:-1]:
        stmts.extend(self.statements(item, _DISCARD))
      return stmts + self.statements(expr.exprs[-1], sink)

    if isinstance(expr, IfThenElse) and (_needs_statements(expr.then_expr) or _needs_statements(expr.else_expr)):
      return [
        cst.If(
          test=self.expression(expr.condition),
          body=self._block(self.statements(expr.then_expr, sink)),
          orelse=cst.Else(body=self._block(self.statements(expr.else_expr, sink))),
        )
      ]

    if isinstance(expr, Set):
      if _plain_member(expr.member):
        target = cst.Attribute(value=_attribute_target(self.expression(expr.expr)), attr=cst.Name(expr.member))
        small: cst.BaseSmallStatement = cst.Assign(
          targets=[cst.AssignTarget(target=target)], value=self.expression(expr.value)
        )
      else:
        small = cst.Expr(value=self._expr_Set(expr))
      assign = cst.SimpleStatementLine(body=[small])
      if sink.kind == "discard":
        return [assign]
      return [assign] + self._deliver(cst.Name("None"), sink)

    if isinstance(expr, Lambda) and sink.kind == "assign":
      return [self._function_def(sink.name, expr)]

    return self._deliver(self.expression(expr), sink)

  def _deliver(self, value: cst.BaseExpression, sink: _Sink) -> List[cst.BaseStatement]:
    if sink.kind == "assign":
      small: cst.BaseSmallStatement = cst.Assign(
        targets=[cst.AssignTarget(target=cst.Name(safe_name(sink.name)))], value=value
      )
    elif sink.kind == "return":
      small = cst.Return(value=value)
    else:
      small = cst.Expr(value=value)
    return [cst.SimpleStatementLine(body=[small])]

  # --- Expressions ---

  def expression(self, expr: Expr) -> cst.BaseExpression:
    method = getattr(self, f"_expr_{type(expr).__name__}", None)
    if method is None:
      raise EmissionError(f"Cannot emit IR node {type(expr).__name__}", expr.range)
    return method(expr)

  def _expr_Literal(self, expr: Literal) -> cst.BaseExpression:
    value = expr.value
    if value is None or isinstance(value, bool):
      return cst.Name(str(value))
    if isinstance(value, int):
      if value < 0:
        return cst.UnaryOperation(operator=cst.Minus(), expression=cst.Integer(str(-value)))
      return cst.Integer(str(value))
    if isinstance(value, float):
      if math.isnan(value) or math.isinf(value):
        return cst.Call(func=cst.Name("float"), args=[cst.Arg(value=cst.SimpleString(repr(str(value))))])
      if value < 0 or (value == 0 and math.copysign(1.0, value) < 0):
        return cst.UnaryOperation(operator=cst.Minus(), expression=cst.Float(repr(-value)))
      return cst.Float(repr(value))
    if isinstance(value, str):
      return cst.SimpleString(repr(value))
    raise EmissionError(f"Unsupported literal {value!r}", expr.range)

  def _expr_Identifier(self, expr: Identifier) -> cst.BaseExpression:
    return _dotted(expr.name.split("."))

  def _expr_Import(self, expr: Import) -> cst.BaseExpression:
    self._imports.add(expr.module)
    parts = expr.module.split(".")
    if expr.member:
      parts.append(expr.member)
    return _dotted(parts)

  def _expr_Get(self, expr: Get) -> cst.BaseExpression:
    target = self.expression(expr.expr)
    if not _plain_member(expr.member):
      return cst.Call(
        func=cst.Name("getattr"),
        args=[cst.Arg(value=target), cst.Arg(value=cst.SimpleString(repr(expr.member)))],
      )
    return cst.Attribute(value=_attribute_target(target), attr=cst.Name(expr.member))

  def _expr_Set(self, expr: Set) -> cst.BaseExpression:
    return cst.Call(
      func=cst.Name("setattr"),
      args=[
        cst.Arg(value=self.expression(expr.expr)),
        cst.Arg(value=cst.SimpleString(repr(expr.member))),
        cst.Arg(value=self.expression(expr.value)),
      ],
    )

  def _expr_Apply(self, expr: Apply) -> cst.BaseExpression:
    return cst.Call(
      func=_parenthesize(self.expression(expr.callee)),
      args=[cst.Arg(value=self.expression(a)) for a in expr.args],
    )

  def _expr_ObjectExpr(self, expr: ObjectExpr) -> cst.BaseExpression:
    return cst.Dict(
      elements=[
        cst.DictElement(key=cst.SimpleString(repr(name)), value=self.expression(value)) for name, value in expr.fields
      ]
    )

  def _expr_Wrapped(self, expr: Wrapped) -> cst.BaseExpression:
    return self.expression(expr.expr)

  def _expr_Emit(self, expr: Emit) -> cst.BaseExpression:
    rendered = []
    for arg in expr.args:
      node = self.expression(arg)
      code = self.render(node)
      rendered.append(f"({code})" if isinstance(node, _COMPOUND) and not node.lpar else code)

    try:
      code = substitute(expr.template, rendered)
    except ValueError as e:
      raise EmissionError(f"Invalid raw-emit template {expr.template!r}: {e}", expr.range)

    try:
      node = cst.parse_expression(code)
    except cst.ParserSyntaxError:
      raise EmissionError(f"Raw-emit template produced invalid Python: {code}", expr.range)

    self._imports.update(expr.imports)
    # A bare tuple would splice into an enclosing argument list
    if isinstance(node, cst.Tuple) and not node.lpar:
      node = _wrap(node)
    return node

  def _expr_Operation(self, expr: Operation) -> cst.BaseExpression:
    operands = [_parenthesize(self.expression(o)) for o in expr.operands]
    op = expr.operator
    if len(operands) == 1:
      return cst.UnaryOperation(operator=_UNARY[op](), expression=operands[0])
    left, right = operands
    if op in _BINARY:
      return cst.BinaryOperation(left=left, operator=_BINARY[op](), right=right)
    if op in _COMPARISON:
      return cst.Comparison(left=left, comparisons=[cst.ComparisonTarget(operator=_COMPARISON[op](), comparator=right)])
    return cst.BooleanOperation(left=left, operator=_BOOLEAN[op](), right=right)

  def _expr_Lambda(self, expr: Lambda) -> cst.BaseExpression:
    return cst.Lambda(params=self._parameters(expr.params), body=self.expression(expr.body))

  def _expr_IfThenElse(self, expr: IfThenElse) -> cst.BaseExpression:
    return cst.IfExp(
      test=_parenthesize(self.expression(expr.condition)),
      body=_parenthesize(self.expression(expr.then_expr)),
      orelse=self.expression(expr.else_expr),
    )

  def _expr_Let(self, expr: Let) -> cst.BaseExpression:
    binding = cst.NamedExpr(
      target=cst.Name(safe_name(expr.name)),
      value=self.expression(expr.value),
      lpar=[cst.LeftParen()],
      rpar=[cst.RightParen()],
    )
    pair = cst.Tuple(elements=[cst.Element(value=binding), cst.Element(value=self.expression(expr.body))])
    return _index_last(pair)

  def _expr_Sequential(self, expr: Sequential) -> cst.BaseExpression:
    if len(expr.exprs) == 1:
      return self.expression(expr.exprs[0])
    items = cst.Tuple(elements=[cst.Element(value=self.expression(e)) for e in expr.exprs])
    return _index_last(items)

  def _parameters(self, names) -> cst.Parameters:
    return cst.Parameters(params=[cst.Param(name=cst.Name(safe_name(n))) for n in names])


def _needs_statements(expr: Expr) -> bool:
  if isinstance(expr, (Let, Sequential, Set)):
    return True
  if isinstance(expr, IfThenElse):
    return _needs_statements(expr.then_expr) or _needs_statements(expr.else_expr)
  return False
