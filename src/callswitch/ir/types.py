"""
Semantic Types and Source Ranges.

Every IR node carries a resolved semantic type and an optional source range.
Both are immutable value objects so they can be shared freely between nodes
produced by different transformations.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceRange:
  """
  A span in the original source file.

  Lines are 1-indexed, columns 0-indexed.
  """

  start_line: int
  start_col: int
  end_line: int
  end_col: int
  path: Optional[str] = None

  def __str__(self) -> str:
    span = f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"
    if self.path:
      return f"{self.path}({span})"
    return span


def format_range(range_: Optional[SourceRange]) -> str:
  """Renders a range for diagnostics, tolerating missing locations."""
  return str(range_) if range_ is not None else "<unknown location>"


@dataclass(frozen=True)
class Type:
  """Base class of the semantic type variants."""


@dataclass(frozen=True)
class AnyType(Type):
  """Unknown or dynamic type."""


@dataclass(frozen=True)
class UnitType(Type):
  pass


@dataclass(frozen=True)
class BooleanType(Type):
  pass


@dataclass(frozen=True)
class NumberType(Type):
  kind: str = "int"
  """Either ``"int"`` or ``"float"``."""


@dataclass(frozen=True)
class StringType(Type):
  pass


@dataclass(frozen=True)
class GenericParam(Type):
  name: str


@dataclass(frozen=True)
class FunctionType(Type):
  """Curried-free function type: ordered parameter types and a result."""

  params: Tuple[Type, ...] = ()
  result: Type = field(default_factory=AnyType)

  @property
  def arity(self) -> int:
    return len(self.params)


@dataclass(frozen=True)
class DeclaredType(Type):
  """
  A nominal type declared in the source ecosystem (e.g. ``System.Random``).
  """

  full_name: str
  generic_args: Tuple[Type, ...] = ()


ANY = AnyType()
UNIT = UnitType()
BOOLEAN = BooleanType()
INT = NumberType("int")
FLOAT = NumberType("float")
STRING = StringType()
