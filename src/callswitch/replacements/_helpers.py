"""
Shared helpers for built-in rules.
"""

from typing import Tuple

from callswitch.errors import UnresolvableCallError
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Expr, Import


def expect_args(info: ApplyInfo, *counts: int) -> Tuple[Expr, ...]:
  """
  Returns ``info.args`` if its length is one of ``counts``.

  Raises:
      UnresolvableCallError: Naming the unexpected count otherwise.
  """
  if len(info.args) not in counts:
    expected = " or ".join(str(c) for c in counts)
    raise UnresolvableCallError(
      info.owner_full_name,
      info.member_name,
      f"expected {expected} argument(s), got {len(info.args)}",
      info.range,
    )
  return info.args


def call_import(module: str, member: str, info: ApplyInfo, args: Tuple[Expr, ...]) -> Apply:
  """``module.member(*args)`` typed and located like the call site."""
  return Apply(Import(module, member), tuple(args), type=info.return_type, range=info.range)
