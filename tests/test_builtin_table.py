"""
Tests for the built-in replacement table: console, math, delegates,
conversion operators, dynamic interop and ``Emit`` attributes.
"""

import pytest

from callswitch.emit.python import PythonEmitter
from callswitch.enums import MemberKind
from callswitch.errors import UnresolvableCallError
from callswitch.ir import types as T
from callswitch.ir.info import CONSTRUCTOR, Decorator
from callswitch.ir.nodes import Apply, Emit, Get, Identifier, Import, Lambda, Literal, Operation, Wrapped
from callswitch.replacements import BuiltinReplacements, builtin_keys
from callswitch.replacements.delegates import delegate_arity


@pytest.fixture
def builtins():
  return BuiltinReplacements()


def _render(expr):
  return PythonEmitter().emit_expression(expr)


# --- Table ---


def test_table_covers_known_owners():
  keys = set(builtin_keys())
  assert ("System.Random", "Next") in keys
  assert ("System.Console", "WriteLine") in keys
  assert ("System.Math", "PI") in keys
  assert ("System.Func`2", CONSTRUCTOR) in keys
  assert ("System.Action", CONSTRUCTOR) in keys


def test_custom_rule_set(options, make_info):
  table = BuiltinReplacements(rules=[(("Acme.Log", "Info"), lambda o, i: Literal("hit"))])

  assert table.handles("Acme.Log", "Info")
  assert not table.handles("System.Random", "Next")
  assert table(options, make_info("Acme.Log", "Info")) == Literal("hit")
  assert table(options, make_info("System.Random", "NextDouble")) is None


# --- Console ---


def test_write_line_single_argument(builtins, options, make_info):
  msg = Literal("hello")
  expr = builtins(options, make_info("System.Console", "WriteLine", args=(msg,)))
  assert _render(expr) == "print('hello')"


def test_write_line_format_arguments(builtins, options, make_info):
  info = make_info("System.Console", "WriteLine", args=(Literal("{0} + {1}"), Identifier("a"), Identifier("b")))
  assert _render(builtins(options, info)) == "print('{0} + {1}'.format(a, b))"


def test_write_line_without_arguments(builtins, options, make_info):
  assert _render(builtins(options, make_info("System.Console", "WriteLine"))) == "print()"


def test_write_without_newline(builtins, options, make_info):
  expr = builtins(options, make_info("System.Console", "Write", args=(Identifier("x"),)))
  assert isinstance(expr, Emit)
  assert _render(expr) == 'print(x, end="")'


# --- Math ---


@pytest.mark.parametrize(
  "member, expected",
  [
    ("Floor", "math.floor(x)"),
    ("Ceiling", "math.ceil(x)"),
    ("Sqrt", "math.sqrt(x)"),
    ("Abs", "abs(x)"),
  ],
)
def test_math_unary_functions(builtins, options, make_info, member, expected):
  expr = builtins(options, make_info("System.Math", member, args=(Identifier("x"),), return_type=T.FLOAT))
  assert _render(expr) == expected
  assert expr.type == T.FLOAT


def test_math_max_requires_two_arguments(builtins, options, make_info):
  expr = builtins(options, make_info("System.Math", "Max", args=(Identifier("a"), Identifier("b"))))
  assert _render(expr) == "max(a, b)"

  with pytest.raises(UnresolvableCallError, match="expected 2 argument"):
    builtins(options, make_info("System.Math", "Max", args=(Identifier("a"),)))


def test_math_pow_is_operator(builtins, options, make_info):
  expr = builtins(options, make_info("System.Math", "Pow", args=(Identifier("a"), Literal(2))))
  assert isinstance(expr, Operation)
  assert _render(expr) == "a ** 2"


def test_math_constants(builtins, options, make_info):
  pi = builtins(options, make_info("System.Math", "PI", kind=MemberKind.GETTER, return_type=T.FLOAT))
  assert pi == Import("math", "pi", type=T.FLOAT)

  with pytest.raises(UnresolvableCallError, match="constant accessed as a method"):
    builtins(options, make_info("System.Math", "E", kind=MemberKind.METHOD))


# --- Delegates ---


def test_delegate_arity():
  assert delegate_arity("System.Func`1") == 0
  assert delegate_arity("System.Func`3") == 2
  assert delegate_arity("System.Action") == 0
  assert delegate_arity("System.Action`2") == 2


def test_delegate_ctor_unwraps_lambda(builtins, options, make_info):
  fn = Lambda(("a",), Identifier("a"))
  fn_type = T.DeclaredType("System.Func`2", (T.INT, T.INT))
  expr = builtins(options, make_info("System.Func`2", CONSTRUCTOR, args=(fn,), return_type=fn_type))

  assert isinstance(expr, Wrapped)
  assert expr.expr is fn
  assert expr.type == fn_type
  assert _render(expr) == "lambda a: a"


def test_delegate_ctor_arity_mismatch(builtins, options, make_info):
  fn = Lambda(("a", "b"), Identifier("a"))
  with pytest.raises(UnresolvableCallError, match="delegate expects 1 parameter"):
    builtins(options, make_info("System.Action`1", CONSTRUCTOR, args=(fn,)))


def test_delegate_ctor_rejects_parameterless_lambda(builtins, options, make_info):
  fn = Lambda((), Literal(1))
  with pytest.raises(UnresolvableCallError, match="delegate expects 2 parameter"):
    builtins(options, make_info("System.Func`3", CONSTRUCTOR, args=(fn,)))
  assert builtins(options, make_info("System.Func`1", CONSTRUCTOR, args=(fn,))).expr is fn


# --- Operators & Interop ---


def test_conversion_operators(builtins, options, make_info):
  owner = "Microsoft.FSharp.Core.Operators"
  expr = builtins(options, make_info(owner, "ToDouble", args=(Identifier("n"),), return_type=T.FLOAT))
  assert expr == Apply(Identifier("float"), (Identifier("n"),), type=T.FLOAT)
  assert _render(builtins(options, make_info(owner, "ToString", args=(Literal(1),)))) == "str(1)"


def test_dynamic_apply(builtins, options, make_info):
  f = Identifier("f")
  expr = builtins(options, make_info("Callswitch.Core.Interop", "op_Dollar", args=(f, Literal(1), Literal(2))))
  assert expr == Apply(f, (Literal(1), Literal(2)))


def test_dynamic_get(builtins, options, make_info):
  obj = Identifier("obj")
  expr = builtins(options, make_info("Callswitch.Core.Interop", "op_Dynamic", args=(obj, Literal("name"))))
  assert expr == Get(obj, "name")


def test_dynamic_get_requires_identifier_literal(builtins, options, make_info):
  info = make_info("Callswitch.Core.Interop", "op_Dynamic", args=(Identifier("obj"), Identifier("key")))
  with pytest.raises(UnresolvableCallError, match="identifier literal"):
    builtins(options, info)


# --- Emit attribute ---


def test_emit_attribute_on_static_member(builtins, options, make_info):
  deco = Decorator("Callswitch.Core.EmitAttribute", ("$0 in $1",))
  info = make_info("Acme.Sets", "Contains", args=(Identifier("x"), Identifier("s")), decorators=(deco,))

  expr = builtins(options, info)

  assert isinstance(expr, Emit)
  assert _render(expr) == "x in s"


def test_emit_attribute_receiver_is_first_placeholder(builtins, options, make_info):
  deco = Decorator("EmitAttribute", ("$0.append($1)",))
  info = make_info("Acme.Bag", "Add", args=(Literal(3),), callee=Identifier("bag"), decorators=(deco,))
  assert _render(builtins(options, info)) == "bag.append(3)"


def test_emit_attribute_takes_precedence_over_rule(builtins, options, make_info):
  deco = Decorator("Emit", ("fast_random()",))
  info = make_info("System.Random", "NextDouble", callee=Identifier("rng"), decorators=(deco,))
  assert _render(builtins(options, info)) == "fast_random()"


def test_emit_attribute_without_template(builtins, options, make_info):
  info = make_info("Acme.Bag", "Add", decorators=(Decorator("Emit"),))
  with pytest.raises(UnresolvableCallError, match="template string"):
    builtins(options, info)
