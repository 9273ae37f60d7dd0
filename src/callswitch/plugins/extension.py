"""
Extension Descriptors.

An extension pairs a capability tag with a handler function. Two hook
interfaces exist:

* ``Capability.CALL_REPLACEMENT``:
  ``handler(options, info: ApplyInfo) -> Optional[Expr]``.
  Returning ``None`` means "no opinion"; any IR expression claims the call.
* ``Capability.AST_TRANSFORM``:
  ``handler(options, source: SourceFile) -> SourceFile``.
  Applied once after parsing, before the main walk.

Handlers must be pure functions of their inputs.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from callswitch.enums import Capability

CallReplacementHandler = Callable[[Any, Any], Optional[Any]]
AstTransformHandler = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class Extension:
  """
  A registered unit of extension logic.

  Attributes:
      name: Unique identifier, used in diagnostics and trace events.
      capability: The hook interface implemented by ``handler``.
      handler: The hook function.
  """

  name: str
  capability: Capability
  handler: Callable[..., Any]

  def __call__(self, options: Any, payload: Any) -> Any:
    return self.handler(options, payload)


def call_replacement(name: Optional[str] = None) -> Callable[[CallReplacementHandler], Extension]:
  """
  Decorator turning a function into a call-replacement extension.

  Args:
      name: Extension name. Defaults to the function's qualified name.

  Usage:
      @call_replacement("my-random")
      def replace_random(options, info):
        if info.owner_full_name == "System.Random" and info.member_name == "Next":
          return Emit("secrets.randbelow($0)", info.args[:1], imports=("secrets",))
        return None
  """

  def decorator(func: CallReplacementHandler) -> Extension:
    return Extension(name or func.__qualname__, Capability.CALL_REPLACEMENT, func)

  return decorator


def ast_transform(name: Optional[str] = None) -> Callable[[AstTransformHandler], Extension]:
  """Decorator turning a function into a whole-tree source transform."""

  def decorator(func: AstTransformHandler) -> Extension:
    return Extension(name or func.__qualname__, Capability.AST_TRANSFORM, func)

  return decorator
