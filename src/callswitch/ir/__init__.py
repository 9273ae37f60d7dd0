"""
IR Package.

Defines the Intermediate Representation shared by the Transform Engine,
extensions, built-in replacements and the target emitter:
- Semantic types and source ranges.
- Expression and declaration nodes (including the raw-emit node).
- The Call Site Descriptor (``ApplyInfo``).
"""

from callswitch.ir.info import CONSTRUCTOR, ApplyInfo, Decorator
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
from callswitch.ir.types import SourceRange, Type

__all__ = [
  "CONSTRUCTOR",
  "ApplyInfo",
  "Decorator",
  "ActionDecl",
  "Apply",
  "Emit",
  "Expr",
  "Get",
  "Identifier",
  "IfThenElse",
  "Import",
  "IRFile",
  "Lambda",
  "Let",
  "Literal",
  "ObjectExpr",
  "Operation",
  "Sequential",
  "Set",
  "ValueDecl",
  "Wrapped",
  "SourceRange",
  "Type",
]
