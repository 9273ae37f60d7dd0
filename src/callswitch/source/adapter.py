"""
Source AST Adapter.

Read-only queries over the typed source model. This is the only place that
knows how source symbols, types and ranges map onto their IR counterparts;
the Transform Engine asks the adapter and never inspects source metadata
directly.

The adapter holds no state besides the path of the file being compiled.
"""

from typing import Optional, Tuple

from callswitch.enums import MemberKind
from callswitch.ir.info import Decorator
from callswitch.ir import types as T
from callswitch.source.ast import Call, MemberRef, Range, SourceExprBase, SourceNode, TypeRef

_PRIMITIVES = {
  "any": T.ANY,
  "obj": T.ANY,
  "unit": T.UNIT,
  "bool": T.BOOLEAN,
  "int": T.INT,
  "float": T.FLOAT,
  "string": T.STRING,
}

# Full .NET names the front-end may use instead of the primitive aliases
_SYSTEM_ALIASES = {
  "System.Object": "obj",
  "System.Void": "unit",
  "System.Boolean": "bool",
  "System.Int32": "int",
  "System.Int64": "int",
  "System.Double": "float",
  "System.Single": "float",
  "System.String": "string",
}


class SourceAdapter:
  """
  Stateless accessors used to populate IR nodes and ``ApplyInfo``.
  """

  def __init__(self, path: Optional[str] = None):
    self.path = path

  # --- Types & Ranges ---

  def to_type(self, ref: Optional[TypeRef]) -> T.Type:
    """Maps a declared source type onto the IR type lattice."""
    if ref is None:
      return T.ANY
    name = _SYSTEM_ALIASES.get(ref.name, ref.name)
    if name in _PRIMITIVES:
      return _PRIMITIVES[name]
    if name == "fun":
      if not ref.args:
        return T.FunctionType()
      *params, result = (self.to_type(a) for a in ref.args)
      return T.FunctionType(tuple(params), result)
    if name.startswith("'"):
      return T.GenericParam(name[1:])
    return T.DeclaredType(name, tuple(self.to_type(a) for a in ref.args))

  def range_of(self, node: SourceNode) -> Optional[T.SourceRange]:
    return self.to_range(node.range)

  def to_range(self, rng: Optional[Range]) -> Optional[T.SourceRange]:
    if rng is None:
      return None
    return T.SourceRange(rng.start_line, rng.start_col, rng.end_line, rng.end_col, self.path)

  def type_of(self, node: SourceExprBase) -> T.Type:
    return self.to_type(node.type)

  # --- Symbol Queries ---

  def owner_full_name(self, call: Call) -> str:
    return call.member.owner

  def member_name(self, call: Call) -> str:
    return call.member.name

  def member_kind(self, call: Call) -> MemberKind:
    return call.member.kind

  def declared_type(self, member: MemberRef) -> T.Type:
    return self.to_type(member.type)

  def decorators(self, member: MemberRef) -> Tuple[Decorator, ...]:
    return tuple(Decorator(attr.full_name, tuple(attr.args)) for attr in member.attributes)

  def call_type_args(self, call: Call) -> Tuple[T.Type, ...]:
    return tuple(self.to_type(a) for a in call.type_args)

  def member_type_args(self, member: MemberRef) -> Tuple[T.Type, ...]:
    return tuple(self.to_type(a) for a in member.generic_params)


def natural_name(full_name: str) -> str:
  """
  Target-side name of a source entity: generic arity suffixes are dropped
  (``System.Collections.Generic.List`1`` becomes ``...List``).
  """
  return ".".join(part.split("`", 1)[0] for part in full_name.split("."))
