"""
Typed Source AST.

The front-end (parser and type checker) is a black box; it hands over a fully
resolved tree in this shape, usually serialized as JSON. Symbols carry their
owner's full name, member kind, declared type and attributes so the compiler
never has to re-resolve anything.

All models are frozen: neither the compiler nor extensions can mutate a node
after it was loaded. Whole-tree hooks rebuild nodes with ``model_copy``
(see ``callswitch.source.rewriter``).
"""

from pathlib import Path
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from callswitch.enums import MemberKind

ConstValue = Union[None, bool, int, float, str]


class SourceModel(BaseModel):
  """Base for every immutable source model."""

  model_config = ConfigDict(frozen=True, extra="forbid")


class Range(SourceModel):
  start_line: int
  start_col: int
  end_line: int
  end_col: int


class TypeRef(SourceModel):
  """
  Declared type reference.

  Primitive names: ``any``, ``unit``, ``bool``, ``int``, ``float``,
  ``string``. ``fun`` denotes a function type whose ``args`` are the
  parameter types followed by the result type. Anything else is a nominal
  type full name (``System.Random``) with optional generic ``args``; a name
  starting with ``'`` is a generic parameter.
  """

  name: str = "any"
  args: Tuple["TypeRef", ...] = ()


class AttributeRef(SourceModel):
  full_name: str
  args: Tuple[ConstValue, ...] = ()


class MemberRef(SourceModel):
  """The resolved symbol targeted by a call or member access."""

  owner: str = Field(description="Full name of the declaring entity.")
  name: str = Field(description="Member name; constructors use '.ctor'.")
  kind: MemberKind = MemberKind.METHOD
  type: TypeRef = Field(default_factory=TypeRef, description="Declared return type.")
  attributes: Tuple[AttributeRef, ...] = ()
  generic_params: Tuple[TypeRef, ...] = ()


class SourceNode(SourceModel):
  """Base for nodes visited by tree walkers."""

  range: Optional[Range] = None


class SourceExprBase(SourceNode):
  type: TypeRef = Field(default_factory=TypeRef)


class Const(SourceExprBase):
  tag: Literal["const"] = "const"
  value: ConstValue = None


class Ident(SourceExprBase):
  tag: Literal["ident"] = "ident"
  name: str


class Call(SourceExprBase):
  """Call or member access on a resolved symbol."""

  tag: Literal["call"] = "call"
  member: MemberRef
  receiver: Optional["SourceExpr"] = None
  args: Tuple["SourceExpr", ...] = ()
  type_args: Tuple[TypeRef, ...] = ()


class Invoke(SourceExprBase):
  """Application of a function value (local binding, lambda)."""

  tag: Literal["invoke"] = "invoke"
  func: "SourceExpr"
  args: Tuple["SourceExpr", ...] = ()


class Param(SourceModel):
  name: str
  type: TypeRef = Field(default_factory=TypeRef)


class Function(SourceExprBase):
  tag: Literal["lambda"] = "lambda"
  params: Tuple[Param, ...] = ()
  body: "SourceExpr"


class LetIn(SourceExprBase):
  tag: Literal["let"] = "let"
  name: str
  value: "SourceExpr"
  body: "SourceExpr"


class Conditional(SourceExprBase):
  tag: Literal["if"] = "if"
  condition: "SourceExpr"
  then_branch: "SourceExpr"
  else_branch: "SourceExpr"


class Sequence(SourceExprBase):
  tag: Literal["seq"] = "seq"
  exprs: Tuple["SourceExpr", ...]


class RecordField(SourceNode):
  name: str
  value: "SourceExpr"


class Record(SourceExprBase):
  tag: Literal["record"] = "record"
  fields: Tuple[RecordField, ...] = ()


class BinaryOp(SourceExprBase):
  tag: Literal["binop"] = "binop"
  operator: str
  left: "SourceExpr"
  right: "SourceExpr"


class UnaryOp(SourceExprBase):
  tag: Literal["unop"] = "unop"
  operator: str
  operand: "SourceExpr"


SourceExpr = Annotated[
  Union[Const, Ident, Call, Invoke, Function, LetIn, Conditional, Sequence, Record, BinaryOp, UnaryOp],
  Field(discriminator="tag"),
]


class Binding(SourceNode):
  tag: Literal["binding"] = "binding"
  name: str
  value: SourceExpr


class Action(SourceNode):
  tag: Literal["action"] = "action"
  expr: SourceExpr


SourceDeclaration = Annotated[Union[Binding, Action], Field(discriminator="tag")]


class SourceFile(SourceModel):
  path: str = "<memory>"
  declarations: Tuple[SourceDeclaration, ...] = ()


for _model in (TypeRef, Call, Invoke, Function, LetIn, Conditional, Sequence, RecordField, Record, BinaryOp, UnaryOp):
  _model.model_rebuild()


def parse_source(text: str) -> SourceFile:
  """
  Validates a JSON document produced by the front-end.

  Raises:
      pydantic.ValidationError: If the document does not match the model.
  """
  return SourceFile.model_validate_json(text)


def load_source_file(path: Path) -> SourceFile:
  """Reads and validates a serialized typed source file."""
  source = parse_source(Path(path).read_text(encoding="utf-8"))
  if source.path == "<memory>":
    source = source.model_copy(update={"path": str(path)})
  return source
