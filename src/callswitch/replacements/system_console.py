"""
Built-ins for ``System.Console``.

Composite format strings (``"Listening on {0}"``) share positional syntax
with ``str.format``, so a format call plus ``print`` is enough.
"""

from callswitch.ir import types as T
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Emit, Get, Identifier
from callswitch.replacements.table import builtin

OWNER = "System.Console"


def _message(info: ApplyInfo):
  args = info.args
  if len(args) > 1:
    return Apply(Get(args[0], "format"), tuple(args[1:]), type=T.STRING, range=info.range)
  return args[0]


@builtin(OWNER, "WriteLine")
def console_write_line(options, info: ApplyInfo):
  if not info.args:
    return Apply(Identifier("print"), (), type=T.UNIT, range=info.range)
  return Apply(Identifier("print"), (_message(info),), type=T.UNIT, range=info.range)


@builtin(OWNER, "Write")
def console_write(options, info: ApplyInfo):
  if not info.args:
    return Emit('print(end="")', (), type=T.UNIT, range=info.range)
  return Emit('print($0, end="")', (_message(info),), type=T.UNIT, range=info.range)
