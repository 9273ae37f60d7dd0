"""
Tests for Python emission.

Covers raw-emit substitution, operand parenthesization, statement lowering,
import collection and the script module format.
"""

import pytest

from callswitch.config import CompilerOptions
from callswitch.emit import PythonEmitter, safe_name, substitute
from callswitch.errors import EmissionError
from callswitch.ir import types as T
from callswitch.ir.nodes import (
  ActionDecl,
  Apply,
  Emit,
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
)

a, b, c, x = Identifier("a"), Identifier("b"), Identifier("c"), Identifier("x")


def _print(*args):
  return Apply(Identifier("print"), args)


@pytest.fixture
def emitter():
  return PythonEmitter()


# --- Raw emit ---


def test_substitute_replaces_every_occurrence():
  assert substitute("$0 + $0 * $1", ["a", "2"]) == "a + a * 2"


def test_substitute_multi_digit_placeholders():
  args = [str(i) for i in range(11)]
  assert substitute("$10-$1", args) == "10-1"


def test_substitute_missing_argument():
  with pytest.raises(ValueError, match=r"placeholder \$2 has no argument"):
    substitute("f($2)", ["a"])


def test_emit_substitutes_all_occurrences(emitter):
  node = Emit("$0 + $0 * $1", (a, Literal(2)))
  assert emitter.emit_expression(node) == "a + a * 2"


def test_emit_parenthesizes_compound_arguments(emitter):
  node = Emit("$0 * 2", (Operation("+", (a, b)),))
  assert emitter.emit_expression(node) == "(a + b) * 2"


def test_emit_result_parenthesized_as_operand(emitter):
  node = Operation("*", (Emit("$0 + 1", (x,)), Literal(2)))
  assert emitter.emit_expression(node) == "(x + 1) * 2"


def test_emit_tuple_result_stays_one_argument(emitter):
  pair = Emit("$0, $1", (Literal(1), Literal(2)))
  assert emitter.emit_expression(Apply(Identifier("f"), (pair,))) == "f((1, 2))"
  assert emitter.emit_expression(Emit("g($0)", (pair,))) == "g((1, 2))"


def test_emit_missing_argument_is_emission_error(emitter):
  rng = T.SourceRange(2, 0, 2, 8)
  with pytest.raises(EmissionError) as exc:
    emitter.emit_expression(Emit("f($2)", (Literal(1),), range=rng))
  assert exc.value.range is rng


def test_emit_invalid_python_is_emission_error(emitter):
  with pytest.raises(EmissionError, match="invalid Python"):
    emitter.emit_expression(Emit("f(", ()))


# --- Expressions ---


@pytest.mark.parametrize(
  "value, expected",
  [
    (None, "None"),
    (True, "True"),
    (3, "3"),
    (-3, "-3"),
    (1.5, "1.5"),
    (-0.5, "-0.5"),
    ("hi", "'hi'"),
  ],
)
def test_literals(emitter, value, expected):
  assert emitter.emit_expression(Literal(value)) == expected


def test_nested_operations_keep_grouping(emitter):
  right_nested = Operation("-", (a, Operation("-", (b, c))))
  negated = Operation("not", (Operation("and", (a, b)),))

  assert emitter.emit_expression(right_nested) == "a - (b - c)"
  assert emitter.emit_expression(negated) == "not (a and b)"
  assert emitter.emit_expression(Operation("==", (a, b))) == "a == b"


def test_identifiers_are_sanitized(emitter):
  assert emitter.emit_expression(Identifier("lambda")) == "lambda_"
  assert emitter.emit_expression(Identifier("x'")) == "x_"
  assert emitter.emit_expression(Identifier("System.Console")) == "System.Console"
  assert safe_name("1st") == "_1st"


def test_member_access(emitter):
  assert emitter.emit_expression(Get(a, "size")) == "a.size"
  assert emitter.emit_expression(Get(a, "my-prop")) == "getattr(a, 'my-prop')"
  assert emitter.emit_expression(Set(a, "size", Literal(2))) == "setattr(a, 'size', 2)"


def test_keyword_members_are_not_renamed(emitter):
  p = Identifier("p")
  assert emitter.emit_expression(Get(p, "finally")) == "getattr(p, 'finally')"
  assert emitter.emit_expression(Apply(Get(p, "then"), ())) == "p.then()"
  ir_file = IRFile("m.fs", (ActionDecl(Set(p, "class", Literal(1))),))
  assert emitter.emit(ir_file) == "setattr(p, 'class', 1)\n"


def test_member_of_integer_literal(emitter):
  assert emitter.emit_expression(Get(Literal(5), "real")) == "(5).real"
  assert emitter.emit_expression(Get(Literal(1.5), "real")) == "1.5.real"
  ir_file = IRFile("m.fs", (ActionDecl(Set(Literal(5), "tag", Literal(1))),))
  assert emitter.emit(ir_file) == "(5).tag = 1\n"


def test_application_of_compound_callee(emitter):
  node = Apply(Lambda(("x",), x), (Literal(1),))
  assert emitter.emit_expression(node) == "(lambda x: x)(1)"


def test_object_expression(emitter):
  assert emitter.emit_expression(ObjectExpr((("a", Literal(1)),))) == "{'a': 1}"
  assert emitter.emit_expression(ObjectExpr()) == "{}"


def test_conditional_expression(emitter):
  assert emitter.emit_expression(IfThenElse(c, Literal(1), Literal(2))) == "1 if c else 2"


def test_let_and_sequence_in_expression_position(emitter):
  assert emitter.emit_expression(Let("y", Literal(1), Identifier("y"))) == "((y := 1), y)[-1]"
  assert emitter.emit_expression(Sequential((_print(Literal(1)), Literal(2)))) == "(print(1), 2)[-1]"


# --- Modules ---


def test_module_with_imports_and_actions(emitter):
  ir_file = IRFile(
    "m.fs",
    (
      ValueDecl("x", Apply(Import("math", "sqrt"), (Literal(4),))),
      ActionDecl(_print(x)),
    ),
  )
  assert emitter.emit(ir_file) == "import math\nx = math.sqrt(4)\nprint(x)\n"


def test_imports_are_sorted_and_deduplicated(emitter):
  ir_file = IRFile(
    "m.fs",
    (
      ActionDecl(Emit("random.random()", (), imports=("random",))),
      ActionDecl(Emit("math.floor($0)", (Literal(1.5),), imports=("math",))),
      ActionDecl(Apply(Import("math", "ceil"), (Literal(1.5),))),
    ),
  )
  code = emitter.emit(ir_file)
  assert code.startswith("import math\nimport random\n")
  assert code.count("import math") == 1


def test_lambda_binding_becomes_function(emitter):
  body = Let("y", Operation("+", (x, Literal(1))), Identifier("y"))
  ir_file = IRFile("m.fs", (ValueDecl("inc", Lambda(("x",), body)),))
  assert emitter.emit(ir_file) == "def inc(x):\n    y = x + 1\n    return y\n"


def test_conditional_with_statements_becomes_if(emitter):
  then = Sequential((_print(Literal(1)), Literal(1)))
  ir_file = IRFile("m.fs", (ValueDecl("r", IfThenElse(c, then, Literal(2))),))
  assert emitter.emit(ir_file) == "if c:\n    print(1)\n    r = 1\nelse:\n    r = 2\n"


def test_setter_in_statement_position(emitter):
  ir_file = IRFile("m.fs", (ActionDecl(Set(Identifier("w"), "Size", Literal(2))),))
  assert emitter.emit(ir_file) == "w.Size = 2\n"


def test_script_format_wraps_actions_in_main():
  emitter = PythonEmitter(CompilerOptions(module_format="script"))
  ir_file = IRFile(
    "m.fs",
    (
      ValueDecl("greeting", Literal("hi")),
      ActionDecl(_print(Identifier("greeting"))),
    ),
  )

  code = emitter.emit(ir_file)

  assert code.startswith("greeting = 'hi'\n")
  assert "def main():\n    print(greeting)\n" in code
  assert code.endswith('if __name__ == "__main__":\n    main()\n')


def test_script_format_without_actions_has_no_main():
  emitter = PythonEmitter(CompilerOptions(module_format="SCRIPT"))
  code = emitter.emit(IRFile("m.fs", (ValueDecl("x", Literal(1)),)))
  assert code == "x = 1\n"


def test_script_format_keeps_declaration_order():
  emitter = PythonEmitter(CompilerOptions(module_format="script"))
  ir_file = IRFile(
    "m.fs",
    (
      ValueDecl("a", Literal(1)),
      ActionDecl(_print(a)),
      ValueDecl("b", Literal(2)),
      ActionDecl(_print(b)),
    ),
  )

  assert emitter.emit(ir_file) == (
    "a = 1\n"
    "def main():\n"
    "    print(a)\n"
    "    b = 2\n"
    "    print(b)\n"
    'if __name__ == "__main__":\n'
    "    main()\n"
  )
