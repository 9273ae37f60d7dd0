"""
Built-in Replacement Table.

Default call-replacement rules for the supported subset of the source
standard library. Rules are keyed by ``(owner full name, member name)`` and
have exactly the signature of an extension handler,
``handler(options, info) -> Optional[Expr]``, so the table is simply the
last link of the resolution chain.

Rules self-register with ``@builtin``; the modules of this package are
imported by ``callswitch.replacements`` so adding a module is enough.
"""

from typing import Callable, Dict, Iterable, Optional, Tuple

from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Expr
from callswitch.replacements.attributes import emit_from_decorator

BuiltinHandler = Callable[[object, ApplyInfo], Optional[Expr]]

_BUILTINS: Dict[Tuple[str, str], BuiltinHandler] = {}


def builtin(owner: str, *members: str) -> Callable[[BuiltinHandler], BuiltinHandler]:
  """
  Decorator registering a rule for one or more members of ``owner``.

  Args:
      owner: Full name of the declaring entity (e.g. ``"System.Random"``).
      members: Member names; use ``CONSTRUCTOR`` for constructors.
  """

  def decorator(func: BuiltinHandler) -> BuiltinHandler:
    for member in members:
      _BUILTINS[(owner, member)] = func
    return func

  return decorator


def builtin_keys() -> Tuple[Tuple[str, str], ...]:
  """All registered ``(owner, member)`` pairs, sorted."""
  return tuple(sorted(_BUILTINS))


class BuiltinReplacements:
  """
  Handler object for the built-in table.

  Resolution order inside the table:
  1. An ``Emit`` decorator on the called symbol (raw template).
  2. The ``(owner, member)`` rule, if any.
  """

  name = "builtins"

  def __init__(self, rules: Optional[Iterable[Tuple[Tuple[str, str], BuiltinHandler]]] = None):
    self._rules: Dict[Tuple[str, str], BuiltinHandler] = dict(rules) if rules is not None else dict(_BUILTINS)

  def handles(self, owner: str, member: str) -> bool:
    return (owner, member) in self._rules

  def try_replace(self, options, info: ApplyInfo) -> Optional[Expr]:
    emitted = emit_from_decorator(info)
    if emitted is not None:
      return emitted

    rule = self._rules.get((info.owner_full_name, info.member_name))
    if rule is None:
      return None
    return rule(options, info)

  def __call__(self, options, info: ApplyInfo) -> Optional[Expr]:
    return self.try_replace(options, info)
