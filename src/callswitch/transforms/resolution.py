"""
Call-Site Resolution.

Implements the extension-resolution protocol for a single ``ApplyInfo``:

1.  Iterate ``CALL_REPLACEMENT`` extensions in registration order.
2.  The first handler returning an IR expression owns the call site; later
    extensions are not consulted.
3.  Otherwise the built-in replacements are asked, with the same signature.
4.  Otherwise the call passes through unmodified as a direct application.

Exactly one of the three produces the result. A handler that raises aborts
the run: IR correctness cannot be assumed after a faulty replacement.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from rich.markup import escape

from callswitch.enums import Capability, MemberKind, ResolutionSource
from callswitch.errors import CallswitchError, ExtensionFaultError, UnresolvableCallError
from callswitch.ir import types as T
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Expr, Get, Identifier, Set
from callswitch.ir.types import format_range
from callswitch.plugins.registry import PluginRegistry
from callswitch.source.adapter import natural_name
from callswitch.tracer import TraceLogger
from callswitch.utils.console import log_warning

# Calls into this namespace are expected to have a replacement
STDLIB_NAMESPACE = "System."


@dataclass(frozen=True)
class Resolution:
  """Outcome of resolving one call site."""

  source: ResolutionSource
  handler: Optional[str]
  """Extension name, ``"builtins"``, or ``None`` for pass-through."""
  expr: Expr


def passthrough(info: ApplyInfo) -> Expr:
  """
  Emits the call as-is, with owner/member mapped to their natural target names.

  * constructors: ``Owner(*args)``
  * getters/fields: ``target.member`` (indexed getters are applied to their args)
  * setters: ``target.member = value``
  * methods: ``target.member(*args)``

  ``target`` is the receiver, or the owner in static context. Argument
  nodes are reused as-is.
  """
  owner = Identifier(natural_name(info.owner_full_name), range=info.range)
  target = info.callee if info.callee is not None else owner
  kind = info.member_kind

  if kind == MemberKind.CONSTRUCTOR or info.is_constructor:
    return Apply(owner, info.args, type=info.return_type, range=info.range)

  if kind in (MemberKind.GETTER, MemberKind.FIELD):
    getter = Get(target, info.member_name, type=T.ANY if info.args else info.return_type, range=info.range)
    if not info.args:
      return getter
    return Apply(getter, info.args, type=info.return_type, range=info.range)

  if kind == MemberKind.SETTER:
    if len(info.args) != 1:
      raise UnresolvableCallError(
        info.owner_full_name,
        info.member_name,
        f"setter expects 1 argument, got {len(info.args)}",
        info.range,
      )
    return Set(target, info.member_name, info.args[0], type=T.UNIT, range=info.range)

  callee = Get(target, info.member_name, range=info.range)
  return Apply(callee, info.args, type=info.return_type, range=info.range)


class CallResolver:
  """
  Resolves call sites against a frozen registry and the built-in table.

  Args:
      options: The run's ``CompilerOptions``; passed read-only to handlers.
      registry: Extensions for this run.
      builtins: Built-in handler (same signature as an extension), or ``None``
          to disable built-ins.
      tracer: Optional trace logger receiving one event per resolution.
  """

  def __init__(
    self,
    options: Any,
    registry: PluginRegistry,
    builtins: Optional[Callable[[Any, ApplyInfo], Optional[Expr]]] = None,
    tracer: Optional[TraceLogger] = None,
  ):
    self.options = options
    self.registry = registry
    self.builtins = builtins
    self.tracer = tracer

  def resolve(self, info: ApplyInfo) -> Resolution:
    for ext in self.registry.extensions_for(Capability.CALL_REPLACEMENT):
      result = self._invoke(ext.name, ext.handler, info)
      if result is not None:
        return self._record(Resolution(ResolutionSource.EXTENSION, ext.name, result), info)

    if self.builtins is not None:
      name = getattr(self.builtins, "name", "builtins")
      result = self._invoke(name, self.builtins, info)
      if result is not None:
        return self._record(Resolution(ResolutionSource.BUILTIN, name, result), info)

    if info.owner_full_name.startswith(STDLIB_NAMESPACE):
      self._warn_untranslated(info)
    return self._record(Resolution(ResolutionSource.PASSTHROUGH, None, passthrough(info)), info)

  def _invoke(self, name: str, handler: Callable, info: ApplyInfo) -> Optional[Expr]:
    try:
      result = handler(self.options, info)
    except CallswitchError as e:
      if e.range is None:
        e.range = info.range
      raise
    except Exception as e:
      raise ExtensionFaultError(
        name,
        info.owner_full_name,
        info.member_name,
        f"{type(e).__name__}: {e}",
        info.range,
      ) from e

    if result is not None and not isinstance(result, Expr):
      raise ExtensionFaultError(
        name,
        info.owner_full_name,
        info.member_name,
        f"returned {type(result).__name__}, expected an IR expression or None",
        info.range,
      )
    return result

  def _warn_untranslated(self, info: ApplyInfo) -> None:
    message = f"No replacement for {info.qualified_member}; emitted as a direct call"
    log_warning(f"{escape(message)} ({escape(format_range(info.range))})")
    if self.tracer is not None:
      self.tracer.log_warning(message)

  def _record(self, resolution: Resolution, info: ApplyInfo) -> Resolution:
    if self.tracer is not None:
      self.tracer.log_resolution(
        info.qualified_member,
        resolution.source.value,
        resolution.handler,
        str(info.range) if info.range else "",
      )
    return resolution
