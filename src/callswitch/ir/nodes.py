"""
Intermediate Representation (IR).

This module defines the language-agnostic expression and declaration nodes
produced by the Transform Engine and consumed by the target emitter. It acts
as the contract between extensions, built-in replacements and emission.

All nodes are frozen dataclasses. Transformations never mutate a node; they
build a new one (``dataclasses.replace`` or ``map_children``).

Every expression carries:

* ``type``: the resolved semantic type (``AnyType`` when unknown).
* ``range``: the optional source range, used in diagnostics.

Both are keyword-only so variant constructors stay positional:
``Apply(callee, (arg,), type=INT)``.
"""

import re
from dataclasses import dataclass, field, fields, replace
from typing import Callable, Iterator, Optional, Tuple, Union

from callswitch.ir.types import ANY, SourceRange, Type

LiteralValue = Union[None, bool, int, float, str]

UNARY_OPERATORS = frozenset({"-", "+", "not", "~"})
BINARY_OPERATORS = frozenset(
  {"+", "-", "*", "/", "//", "%", "**", "==", "!=", "<", "<=", ">", ">=", "and", "or", "&", "|", "^"}
)

_PLACEHOLDER = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class Expr:
  """Base class of all IR expressions."""

  type: Type = field(default=ANY, kw_only=True)
  range: Optional[SourceRange] = field(default=None, kw_only=True, compare=False)


@dataclass(frozen=True)
class Literal(Expr):
  value: LiteralValue


@dataclass(frozen=True)
class Identifier(Expr):
  """
  Reference to a binding. Dotted names denote a qualified path
  (``System.Console``) and are emitted as attribute chains.
  """

  name: str


@dataclass(frozen=True)
class Import(Expr):
  """
  Reference to a target-language module or one of its members.
  The emitter adds the matching import statement.
  """

  module: str
  member: Optional[str] = None


@dataclass(frozen=True)
class Get(Expr):
  """Member read: ``expr.member``."""

  expr: Expr
  member: str


@dataclass(frozen=True)
class Set(Expr):
  """Member write: ``expr.member = value``."""

  expr: Expr
  member: str
  value: Expr


@dataclass(frozen=True)
class Apply(Expr):
  """Function application with ordered arguments."""

  callee: Expr
  args: Tuple[Expr, ...] = ()


@dataclass(frozen=True)
class ObjectExpr(Expr):
  """Object/record construction from an ordered field list."""

  fields: Tuple[Tuple[str, Expr], ...] = ()


@dataclass(frozen=True)
class Wrapped(Expr):
  """An expression re-annotated with ``type``; no runtime effect."""

  expr: Expr


@dataclass(frozen=True)
class Emit(Expr):
  """
  Raw-emit node: an opaque target fragment with zero-indexed ``$N``
  placeholders substituted positionally by ``args`` at emission time.

  ``imports`` lists the target modules the fragment refers to.
  Substitution and parenthesization belong to the emitter, not to the IR.
  """

  template: str
  args: Tuple[Expr, ...] = ()
  imports: Tuple[str, ...] = ()

  @property
  def placeholders(self) -> Tuple[int, ...]:
    """Distinct placeholder indices referenced by the template, sorted."""
    return tuple(sorted({int(m) for m in _PLACEHOLDER.findall(self.template)}))


@dataclass(frozen=True)
class Operation(Expr):
  """Unary (one operand) or binary (two operands) operator application."""

  operator: str
  operands: Tuple[Expr, ...]

  def __post_init__(self) -> None:
    if len(self.operands) == 1 and self.operator in UNARY_OPERATORS:
      return
    if len(self.operands) == 2 and self.operator in BINARY_OPERATORS:
      return
    raise ValueError(f"Invalid operation '{self.operator}' with {len(self.operands)} operand(s)")


@dataclass(frozen=True)
class Lambda(Expr):
  params: Tuple[str, ...]
  body: Expr


@dataclass(frozen=True)
class Let(Expr):
  """Binds ``name`` to ``value`` within ``body``."""

  name: str
  value: Expr
  body: Expr


@dataclass(frozen=True)
class IfThenElse(Expr):
  condition: Expr
  then_expr: Expr
  else_expr: Expr


@dataclass(frozen=True)
class Sequential(Expr):
  """Evaluates ``exprs`` in order; the value is the last one."""

  exprs: Tuple[Expr, ...]


# --- Declarations ---


@dataclass(frozen=True)
class Declaration:
  range: Optional[SourceRange] = field(default=None, kw_only=True, compare=False)


@dataclass(frozen=True)
class ValueDecl(Declaration):
  """Top-level binding. Lambda values are emitted as functions."""

  name: str
  value: Expr


@dataclass(frozen=True)
class ActionDecl(Declaration):
  """Top-level expression evaluated for its effect."""

  expr: Expr


@dataclass(frozen=True)
class IRFile:
  path: str
  declarations: Tuple[Declaration, ...] = ()


# --- Generic traversal ---


def iter_children(node: Expr) -> Iterator[Expr]:
  """
  Yields the direct child expressions of ``node`` in field order.
  """
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, Expr):
      yield value
    elif isinstance(value, tuple):
      for item in value:
        if isinstance(item, Expr):
          yield item
        elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], Expr):
          yield item[1]


def map_children(node: Expr, fn: Callable[[Expr], Expr]) -> Expr:
  """
  Returns a copy of ``node`` with ``fn`` applied to each direct child.

  The original node is left untouched. If no child changes, ``node`` itself
  is returned so callers can detect no-ops by identity.
  """
  changes = {}
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, Expr):
      new_value = fn(value)
      if new_value is not value:
        changes[f.name] = new_value
    elif isinstance(value, tuple) and value:
      new_items = []
      for item in value:
        if isinstance(item, Expr):
          new_items.append(fn(item))
        elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[1], Expr):
          new_items.append((item[0], fn(item[1])))
        else:
          new_items.append(item)
      if any(a is not b for a, b in zip(new_items, value)):
        changes[f.name] = tuple(new_items)
  if not changes:
    return node
  return replace(node, **changes)


def walk(node: Expr) -> Iterator[Expr]:
  """Pre-order iteration over ``node`` and all of its descendants."""
  yield node
  for child in iter_children(node):
    yield from walk(child)
