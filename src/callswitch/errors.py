"""
Exception Hierarchy.

All fatal conditions of a compilation run derive from ``CallswitchError``.
Errors raised while resolving a call site always carry the owner and member
names of that call site and its source range so the failure can be located
without re-running the compiler.
"""

from typing import Optional

from callswitch.ir.types import SourceRange, format_range


class CallswitchError(Exception):
  """
  Base class for all fatal compiler errors.
  """

  def __init__(self, message: str, range_: Optional[SourceRange] = None):
    self.message = message
    self.range = range_
    super().__init__(self.__str__())

  def __str__(self) -> str:
    if self.range is None:
      return self.message
    return f"{format_range(self.range)}: {self.message}"


class UnresolvableCallError(CallswitchError):
  """
  A known owner/member pair was called with a shape no rule can translate
  (typically an unexpected argument count).
  """

  def __init__(self, owner: str, member: str, reason: str, range_: Optional[SourceRange] = None):
    self.owner = owner
    self.member = member
    self.reason = reason
    super().__init__(f"Cannot resolve call to {owner}.{member}: {reason}", range_)


class ExtensionFaultError(CallswitchError):
  """
  An extension handler raised, or returned something that is not IR.
  """

  def __init__(
    self,
    extension: str,
    owner: str,
    member: str,
    cause: str,
    range_: Optional[SourceRange] = None,
  ):
    self.extension = extension
    self.owner = owner
    self.member = member
    self.cause = cause
    super().__init__(f"Extension '{extension}' failed on {owner}.{member}: {cause}", range_)


class TransformError(CallswitchError):
  """The source tree contains a node the engine cannot lower."""


class RegistryError(CallswitchError):
  """Base class for misuse of the plugin registry."""


class RegistryFrozenError(RegistryError):
  """Registration attempted after the registry was frozen for a run."""


class DuplicateExtensionError(RegistryError):
  """Two extensions with the same name and capability were registered."""


class CompilationError(CallswitchError):
  """Raised by the convenience API when a compilation run fails."""


class EmissionError(CallswitchError):
  """The IR cannot be rendered as target code (e.g. a malformed raw-emit template)."""
