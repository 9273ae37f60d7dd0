"""
Enumerations for callswitch.

This module defines the closed sets used across the codebase: extension
capabilities, member kinds of call sites, module output formats and the
origin of a call-site resolution.
"""

from enum import Enum


class Capability(str, Enum):
  """
  Hook interfaces an extension may implement.

  The set is closed; the engine only iterates extensions tagged with the
  capability of the hook point it is currently at.
  """

  CALL_REPLACEMENT = "call_replacement"
  AST_TRANSFORM = "ast_transform"


class MemberKind(str, Enum):
  """
  Kind of member referenced by a call site.
  """

  METHOD = "method"
  GETTER = "getter"
  SETTER = "setter"
  CONSTRUCTOR = "constructor"
  FIELD = "field"


class ModuleFormat(str, Enum):
  """
  Shape of the emitted target module.
  """

  MODULE = "module"  # top-level actions emitted in place
  SCRIPT = "script"  # actions collected into main() behind a __main__ guard


class ResolutionSource(str, Enum):
  """
  Which link of the resolution chain produced the IR for a call site.
  """

  EXTENSION = "extension"
  BUILTIN = "builtin"
  PASSTHROUGH = "passthrough"
