"""
callswitch Package.

The call-replacement subsystem of a source-to-Python compiler. Calls to
members of the source standard library are rewritten into idiomatic Python,
and third-party extensions can override any of those decisions or add their
own.

Usage
-----

Simple Compilation
^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import callswitch
    code = callswitch.compile_source(open("program.json").read())

Custom Replacement
^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from callswitch import Compiler, CompilerOptions, Emit, call_replacement

    @call_replacement("secure-random")
    def secure_next(options, info):
      if info.qualified_member == "System.Random.Next" and len(info.args) == 1:
        return Emit("secrets.randbelow($0)", info.args, imports=("secrets",))
      return None

    compiler = Compiler(CompilerOptions(extensions=(secure_next,)))
    res = compiler.compile_file("program.json")
"""

from typing import Any, Dict, Optional, Sequence, Union

from callswitch.compiler import CompilationResult, Compiler
from callswitch.config import CompilerOptions
from callswitch.enums import Capability, MemberKind, ModuleFormat
from callswitch.errors import CallswitchError, CompilationError
from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Emit
from callswitch.plugins import Extension, PluginRegistry, ast_transform, call_replacement
from callswitch.source.ast import SourceFile, parse_source

__version__ = "0.1.0"


def compile_source(
  source: Union[str, SourceFile],
  extensions: Sequence[Extension] = (),
  module_format: Optional[str] = None,
  target_flags: Optional[Dict[str, Any]] = None,
  plugin_settings: Optional[Dict[str, Any]] = None,
) -> str:
  """
  Compiles a typed source tree to Python code.

  This is a convenience wrapper around `Compiler`. Options not given here
  are read from ``[tool.callswitch]`` in the nearest ``pyproject.toml``.

  Args:
      source: A `SourceFile`, or its JSON serialization.
      extensions: Extensions for the run, highest priority first.
      module_format: "module" or "script".
      target_flags: Target environment flags visible to every hook.
      plugin_settings: Configuration passed to extensions.

  Returns:
      str: The generated Python code.

  Raises:
      CompilationError: If the run fails.
  """
  if isinstance(source, str):
    source = parse_source(source)

  options = CompilerOptions.load(
    extensions=extensions,
    module_format=module_format,
    target_flags=target_flags,
    plugin_settings=plugin_settings,
  )
  result = Compiler(options).compile(source)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise CompilationError(f"Compilation failed:\n{error_msg}")

  return result.code


__all__ = [
  "ApplyInfo",
  "Capability",
  "CallswitchError",
  "CompilationError",
  "CompilationResult",
  "Compiler",
  "CompilerOptions",
  "Emit",
  "Extension",
  "MemberKind",
  "ModuleFormat",
  "PluginRegistry",
  "SourceFile",
  "ast_transform",
  "call_replacement",
  "compile_source",
  "__version__",
]
