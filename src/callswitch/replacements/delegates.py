"""
Built-ins for delegate construction (``Func<...>`` / ``Action<...>``).

Target callables need no delegate wrapper, so ``Func<_,_,_>(fun a b -> ...)``
becomes the lambda itself. The lambda's arity must match the delegate's
parameter count; a mismatch means the source relies on currying this
compiler does not translate.
"""

from callswitch.errors import UnresolvableCallError
from callswitch.ir.info import CONSTRUCTOR, ApplyInfo
from callswitch.ir.nodes import Lambda, Wrapped
from callswitch.ir.types import FunctionType
from callswitch.replacements._helpers import expect_args
from callswitch.replacements.table import builtin

MAX_DELEGATE_ARITY = 16

FUNC_OWNERS = tuple(f"System.Func`{n}" for n in range(1, MAX_DELEGATE_ARITY + 2))
ACTION_OWNERS = ("System.Action",) + tuple(f"System.Action`{n}" for n in range(1, MAX_DELEGATE_ARITY + 1))


def delegate_arity(owner: str) -> int:
  """Number of parameters the delegate type accepts."""
  name, _, count = owner.partition("`")
  generic_count = int(count) if count else 0
  if name == "System.Func":
    return generic_count - 1  # last generic argument is the result
  return generic_count


def _delegate_ctor(options, info: ApplyInfo):
  (func,) = expect_args(info, 1)
  expected = delegate_arity(info.owner_full_name)
  callable_arg = isinstance(func, Lambda) or isinstance(func.type, FunctionType)
  if callable_arg and info.lambda_arg_arity != expected:
    raise UnresolvableCallError(
      info.owner_full_name,
      info.member_name,
      f"delegate expects {expected} parameter(s) but the function takes {info.lambda_arg_arity}",
      info.range,
    )
  return Wrapped(func, type=info.return_type, range=info.range)


for _owner in FUNC_OWNERS + ACTION_OWNERS:
  builtin(_owner, CONSTRUCTOR)(_delegate_ctor)
