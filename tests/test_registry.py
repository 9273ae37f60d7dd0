"""
Tests for extension descriptors and the plugin registry.
Verifies ordering, capability filtering, duplicate detection and freezing.
"""

import dataclasses

import pytest

from callswitch.config import CompilerOptions
from callswitch.enums import Capability
from callswitch.errors import DuplicateExtensionError, RegistryError, RegistryFrozenError
from callswitch.plugins import Extension, PluginRegistry, ast_transform, call_replacement


def _noop(options, payload):
  return None


def test_decorators_build_extensions():
  @call_replacement("my-calls")
  def replace(options, info):
    return None

  @ast_transform()
  def rewrite(options, source):
    return source

  assert isinstance(replace, Extension)
  assert replace.name == "my-calls"
  assert replace.capability == Capability.CALL_REPLACEMENT
  assert rewrite.capability == Capability.AST_TRANSFORM
  assert rewrite.name.endswith("rewrite")


def test_extension_is_callable_and_frozen():
  ext = Extension("echo", Capability.AST_TRANSFORM, lambda options, payload: payload)
  assert ext(None, "tree") == "tree"
  with pytest.raises(dataclasses.FrozenInstanceError):
    ext.name = "other"


def test_registration_order_is_preserved():
  a = Extension("a", Capability.CALL_REPLACEMENT, _noop)
  b = Extension("b", Capability.AST_TRANSFORM, _noop)
  c = Extension("c", Capability.CALL_REPLACEMENT, _noop)

  registry = PluginRegistry([a, b, c])

  assert len(registry) == 3
  assert list(registry) == [a, b, c]
  assert registry.extensions_for(Capability.CALL_REPLACEMENT) == (a, c)
  assert registry.extensions_for(Capability.AST_TRANSFORM) == (b,)
  assert registry.handlers_for(Capability.AST_TRANSFORM) == (_noop,)


def test_duplicate_name_same_capability_rejected():
  registry = PluginRegistry([Extension("dup", Capability.CALL_REPLACEMENT, _noop)])
  with pytest.raises(DuplicateExtensionError, match="dup"):
    registry.register(Extension("dup", Capability.CALL_REPLACEMENT, _noop))


def test_same_name_different_capability_allowed():
  registry = PluginRegistry()
  registry.register(Extension("shared", Capability.CALL_REPLACEMENT, _noop))
  registry.register(Extension("shared", Capability.AST_TRANSFORM, _noop))
  assert len(registry) == 2


def test_frozen_registry_rejects_registration():
  registry = PluginRegistry()
  registry.freeze()

  assert registry.frozen
  with pytest.raises(RegistryFrozenError):
    registry.register(Extension("late", Capability.CALL_REPLACEMENT, _noop))
  assert issubclass(RegistryFrozenError, RegistryError)


def test_from_options_is_frozen_and_ordered():
  a = Extension("a", Capability.CALL_REPLACEMENT, _noop)
  b = Extension("b", Capability.CALL_REPLACEMENT, _noop)
  registry = PluginRegistry.from_options(CompilerOptions(extensions=(a, b)))

  assert registry.frozen
  assert registry.extensions_for(Capability.CALL_REPLACEMENT) == (a, b)


def test_iteration_does_not_expose_internal_list():
  registry = PluginRegistry([Extension("a", Capability.CALL_REPLACEMENT, _noop)])
  snapshot = list(registry)
  snapshot.clear()
  assert len(registry) == 1
