"""
Built-ins for dynamic interop operators.

* ``f $ (a, b)``: apply an untyped value as a function.
* ``obj?name``: read a member by name on an untyped value.
"""

from callswitch.errors import UnresolvableCallError
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Get, Literal
from callswitch.replacements._helpers import expect_args
from callswitch.replacements.table import builtin

OWNER = "Callswitch.Core.Interop"


@builtin(OWNER, "op_Dollar")
def dynamic_apply(options, info: ApplyInfo):
  if not info.args:
    raise UnresolvableCallError(OWNER, "op_Dollar", "missing function operand", info.range)
  func, *args = info.args
  return Apply(func, tuple(args), type=info.return_type, range=info.range)


@builtin(OWNER, "op_Dynamic")
def dynamic_get(options, info: ApplyInfo):
  target, name = expect_args(info, 2)
  if not isinstance(name, Literal) or not isinstance(name.value, str) or not name.value.isidentifier():
    raise UnresolvableCallError(OWNER, "op_Dynamic", "member name must be an identifier literal", info.range)
  return Get(target, name.value, type=info.return_type, range=info.range)
