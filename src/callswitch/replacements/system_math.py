"""
Built-ins for ``System.Math``.
"""

from callswitch.enums import MemberKind
from callswitch.errors import UnresolvableCallError
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Identifier, Import, Operation
from callswitch.replacements._helpers import call_import, expect_args
from callswitch.replacements.table import builtin

OWNER = "System.Math"

_MATH_MODULE = {
  "Floor": "floor",
  "Ceiling": "ceil",
  "Sqrt": "sqrt",
  "Log": "log",
  "Exp": "exp",
}

_PYTHON_BUILTIN = {
  "Abs": ("abs", (1,)),
  "Max": ("max", (2,)),
  "Min": ("min", (2,)),
  "Round": ("round", (1, 2)),
}


@builtin(OWNER, *_MATH_MODULE)
def math_module_function(options, info: ApplyInfo):
  args = expect_args(info, 1)
  return call_import("math", _MATH_MODULE[info.member_name], info, args)


@builtin(OWNER, *_PYTHON_BUILTIN)
def math_python_builtin(options, info: ApplyInfo):
  name, counts = _PYTHON_BUILTIN[info.member_name]
  args = expect_args(info, *counts)
  return Apply(Identifier(name), args, type=info.return_type, range=info.range)


@builtin(OWNER, "Pow")
def math_pow(options, info: ApplyInfo):
  base, exponent = expect_args(info, 2)
  return Operation("**", (base, exponent), type=info.return_type, range=info.range)


@builtin(OWNER, "PI", "E")
def math_constant(options, info: ApplyInfo):
  if info.member_kind not in (MemberKind.GETTER, MemberKind.FIELD):
    raise UnresolvableCallError(OWNER, info.member_name, "constant accessed as a method", info.range)
  return Import("math", info.member_name.lower(), type=info.return_type, range=info.range)
