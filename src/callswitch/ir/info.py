"""
Call Site Descriptor.

``ApplyInfo`` is built once per call or member access encountered during the
walk and handed to every call-replacement handler (extensions first, then
built-in replacements). Its field names and shapes are the contract all
handlers depend on.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from callswitch.enums import MemberKind
from callswitch.ir.nodes import Expr, Lambda, LiteralValue
from callswitch.ir.types import ANY, FunctionType, SourceRange, Type

CONSTRUCTOR = ".ctor"
"""Member name used for constructors; never a valid identifier."""


@dataclass(frozen=True)
class Decorator:
  """An attribute/decorator attached to the called symbol."""

  full_name: str
  args: Tuple[LiteralValue, ...] = ()

  @property
  def short_name(self) -> str:
    """Last dotted segment, without a trailing ``Attribute`` suffix."""
    name = self.full_name.rsplit(".", 1)[-1]
    if name.endswith("Attribute") and name != "Attribute":
      name = name[: -len("Attribute")]
    return name


@dataclass(frozen=True)
class ApplyInfo:
  owner_full_name: str
  member_name: str
  member_kind: MemberKind
  callee: Optional[Expr]
  """Receiver expression; ``None`` in static context."""
  args: Tuple[Expr, ...]
  return_type: Type = ANY
  range: Optional[SourceRange] = None
  decorators: Tuple[Decorator, ...] = ()
  call_type_args: Tuple[Type, ...] = ()
  member_type_args: Tuple[Type, ...] = ()
  lambda_arg_arity: int = 0

  @property
  def is_static(self) -> bool:
    return self.callee is None

  @property
  def is_constructor(self) -> bool:
    return self.member_name == CONSTRUCTOR

  @property
  def qualified_member(self) -> str:
    return f"{self.owner_full_name}.{self.member_name}"

  def find_decorator(self, short_name: str) -> Optional[Decorator]:
    for deco in self.decorators:
      if deco.short_name == short_name:
        return deco
    return None


def lambda_arity(args: Tuple[Expr, ...]) -> int:
  """
  Parameter count of the first callable argument, 0 when there is none.

  A literal lambda counts its parameters; any other argument counts the
  parameters of its function type.
  """
  for arg in args:
    if isinstance(arg, Lambda):
      return len(arg.params)
    if isinstance(arg.type, FunctionType):
      return arg.type.arity
  return 0
