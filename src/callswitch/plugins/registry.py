"""
Plugin Registry.

Holds the ordered list of extensions supplied to a compilation run.
Registration order doubles as priority order: when several extensions could
claim the same call site, the first registered one wins.

A registry is filled before a run starts and frozen when the run begins.
Frozen registries are read-only and may be shared between independent runs.
"""

from typing import Iterable, List, Tuple

from callswitch.enums import Capability
from callswitch.errors import DuplicateExtensionError, RegistryFrozenError
from callswitch.plugins.extension import Extension


class PluginRegistry:
  """
  Ordered, capability-filterable collection of extensions.
  """

  def __init__(self, extensions: Iterable[Extension] = ()):
    self._extensions: List[Extension] = []
    self._frozen = False
    for ext in extensions:
      self.register(ext)

  @classmethod
  def from_options(cls, options) -> "PluginRegistry":
    """Builds a frozen registry from ``CompilerOptions.extensions``."""
    registry = cls(options.extensions)
    registry.freeze()
    return registry

  @property
  def frozen(self) -> bool:
    return self._frozen

  def register(self, extension: Extension) -> Extension:
    """
    Appends an extension, giving it the lowest priority so far.

    Raises:
        RegistryFrozenError: If called after ``freeze()``.
        DuplicateExtensionError: If an extension with the same name and
            capability is already registered.
    """
    if self._frozen:
      raise RegistryFrozenError(f"Cannot register '{extension.name}': registry is frozen for compilation")
    for existing in self._extensions:
      if existing.name == extension.name and existing.capability == extension.capability:
        raise DuplicateExtensionError(
          f"Extension '{extension.name}' already registered for capability '{extension.capability.value}'"
        )
    self._extensions.append(extension)
    return extension

  def freeze(self) -> None:
    self._frozen = True

  def extensions_for(self, capability: Capability) -> Tuple[Extension, ...]:
    """Extensions declaring ``capability``, in registration order."""
    return tuple(ext for ext in self._extensions if ext.capability == capability)

  def handlers_for(self, capability: Capability) -> Tuple:
    """Handler functions declaring ``capability``, in registration order."""
    return tuple(ext.handler for ext in self.extensions_for(capability))

  def __len__(self) -> int:
    return len(self._extensions)

  def __iter__(self):
    return iter(tuple(self._extensions))
