"""
Built-ins for ``System.Random``.

The target's ``random`` module is a process-wide source, so instances carry
no state: the constructor becomes an empty object typed as ``System.Random``
and the instance methods ignore their receiver.
"""

from callswitch.errors import UnresolvableCallError
from callswitch.ir import types as T
from callswitch.ir.info import CONSTRUCTOR, ApplyInfo
from callswitch.ir.nodes import Emit, Literal, ObjectExpr
from callswitch.replacements._helpers import call_import
from callswitch.replacements.table import builtin

OWNER = "System.Random"

MAX_INT = 2147483647  # Int32.MaxValue, exclusive bound of parameterless Next()

NEXT_TEMPLATE = "math.floor(random.random() * ($1 - $0)) + $0"


@builtin(OWNER, CONSTRUCTOR)
def random_ctor(options, info: ApplyInfo):
  """
  ``new Random()`` -> empty object.

  The object keeps the declared return type; an untyped empty object would be
  dropped by the pruning pass.
  """
  if info.args:
    raise UnresolvableCallError(OWNER, info.member_name, "seeded random sources are not supported", info.range)
  return ObjectExpr((), type=info.return_type, range=info.range)


@builtin(OWNER, "Next")
def random_next(options, info: ApplyInfo):
  """
  ``Next()``, ``Next(max)``, ``Next(min, max)`` -> integer in ``[min, max)``.
  """
  args = info.args
  if len(args) == 0:
    min_value, max_value = Literal(0, type=T.INT), Literal(MAX_INT, type=T.INT)
  elif len(args) == 1:
    min_value, max_value = Literal(0, type=T.INT), args[0]
  elif len(args) == 2:
    min_value, max_value = args
  else:
    raise UnresolvableCallError(OWNER, "Next", f"unexpected number of arguments: {len(args)}", info.range)

  return Emit(
    NEXT_TEMPLATE,
    (min_value, max_value),
    imports=("math", "random"),
    type=info.return_type,
    range=info.range,
  )


@builtin(OWNER, "NextDouble")
def random_next_double(options, info: ApplyInfo):
  return call_import("random", "random", info, ())
