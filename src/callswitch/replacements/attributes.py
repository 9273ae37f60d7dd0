"""
Decorator-Driven Raw Emit.

A symbol declared with an ``Emit`` attribute carries its own target
template: ``[<Emit("$0.append($1)")>]``. For instance members the receiver
is placeholder ``$0`` and the arguments follow.
"""

from typing import Optional

from callswitch.errors import UnresolvableCallError
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Emit

EMIT_ATTRIBUTE = "Emit"


def emit_from_decorator(info: ApplyInfo) -> Optional[Emit]:
  deco = info.find_decorator(EMIT_ATTRIBUTE)
  if deco is None:
    return None

  if not deco.args or not isinstance(deco.args[0], str):
    raise UnresolvableCallError(
      info.owner_full_name,
      info.member_name,
      f"{deco.full_name} requires a template string argument",
      info.range,
    )

  args = info.args if info.callee is None else (info.callee, *info.args)
  return Emit(deco.args[0], tuple(args), type=info.return_type, range=info.range)
