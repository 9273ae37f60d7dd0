"""
Compilation Orchestrator.

This module provides the `Compiler`, the driver of one compilation run.

The pipeline consists of:

1.  **AST Hooks**: ``AST_TRANSFORM`` extensions rewrite the whole source tree,
    in registration order. Each receives the output of the previous one.
2.  **Transform Walk**: the `SourceTransformer` lowers the tree into IR,
    resolving every call site through extensions, built-ins or pass-through.
3.  **Passes**: IR-to-IR cleanups (e.g. pruning untyped empty objects).
4.  **Emission**: the `PythonEmitter` renders the IR as a Python module.

Any `CallswitchError` aborts the run. The result then carries the error and
no code: a partially translated module is never returned.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field
from rich.markup import escape

from callswitch.config import CompilerOptions
from callswitch.emit.python import PythonEmitter
from callswitch.enums import Capability
from callswitch.errors import CallswitchError, ExtensionFaultError
from callswitch.ir.nodes import IRFile
from callswitch.passes import DEFAULT_PASSES
from callswitch.plugins.registry import PluginRegistry
from callswitch.replacements import BuiltinReplacements
from callswitch.source.ast import SourceFile, load_source_file
from callswitch.tracer import TraceLogger
from callswitch.transforms import SourceTransformer
from callswitch.utils.console import log_error, log_info, log_success

IRPass = Callable[[IRFile], IRFile]


class CompilationResult(BaseModel):
  """
  Structured result of a single file compilation.
  """

  code: str = Field(default="", description="The generated target source code.")
  errors: List[str] = Field(default_factory=list, description="Fatal error messages of the run.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal errors.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Returns True if any errors were recorded during compilation.

    Returns:
        bool: True if errors list is non-empty.
    """
    return len(self.errors) > 0


class Compiler:
  """
  Runs the compilation pipeline for one options/extension configuration.

  A `Compiler` holds no per-run state and may compile any number of files.
  """

  def __init__(
    self,
    options: Optional[CompilerOptions] = None,
    builtins: Optional[Callable] = None,
    passes: Sequence[IRPass] = DEFAULT_PASSES,
  ):
    """
    Args:
        options: Frozen options of the run. Loaded from ``pyproject.toml`` if None.
        builtins: Built-in replacement handler. Defaults to the full table.
        passes: IR passes applied after the transform walk, in order.
    """
    self.options = options if options is not None else CompilerOptions.load()
    self.registry = PluginRegistry.from_options(self.options)
    self.builtins = builtins if builtins is not None else BuiltinReplacements()
    self.passes = tuple(passes)

  def compile(self, source: SourceFile) -> CompilationResult:
    """
    Compiles a typed source tree to Python.

    Args:
        source (SourceFile): The type-checked tree from the front-end.

    Returns:
        CompilationResult: Generated code, or the fatal error of the run.
    """
    tracer = TraceLogger()
    tracer.start_phase("Compilation", source.path)
    log_info(f"Compiling {escape(source.path)}")

    try:
      source = self._apply_ast_hooks(source, tracer)

      tracer.start_phase("Transform", "Source tree -> IR")
      transformer = SourceTransformer(self.options, self.registry, self.builtins, tracer, path=source.path)
      ir_file = transformer.transform_file(source)
      tracer.end_phase()

      tracer.start_phase("Passes", f"{len(self.passes)} pass(es)")
      for ir_pass in self.passes:
        ir_file = ir_pass(ir_file)
      tracer.end_phase()

      tracer.start_phase("Emission", "IR -> Python")
      code = PythonEmitter(self.options).emit(ir_file)
      tracer.end_phase()

    except CallswitchError as e:
      log_error(f"Compilation of {escape(source.path)} failed: {escape(str(e))}")
      tracer.log_warning(str(e))
      tracer.end_all_phases()
      return CompilationResult(code="", errors=[str(e)], success=False, trace_events=tracer.export())

    tracer.end_phase()
    log_success(f"Compiled {escape(source.path)} ({len(transformer.resolutions)} call site(s) resolved)")
    return CompilationResult(code=code, success=True, trace_events=tracer.export())

  def compile_file(self, path: Path) -> CompilationResult:
    """Loads a serialized source tree from ``path`` and compiles it."""
    return self.compile(load_source_file(Path(path)))

  def _apply_ast_hooks(self, source: SourceFile, tracer: TraceLogger) -> SourceFile:
    hooks = self.registry.extensions_for(Capability.AST_TRANSFORM)
    if not hooks:
      return source

    tracer.start_phase("AST Hooks", f"{len(hooks)} extension(s)")
    for ext in hooks:
      try:
        result = ext(self.options, source)
      except CallswitchError:
        raise
      except Exception as e:
        raise ExtensionFaultError(ext.name, "<module>", source.path, f"{type(e).__name__}: {e}") from e

      if not isinstance(result, SourceFile):
        raise ExtensionFaultError(
          ext.name,
          "<module>",
          source.path,
          f"returned {type(result).__name__}, expected a SourceFile",
        )
      if result is not source:
        tracer.log_mutation(ext.name, f"{len(source.declarations)} -> {len(result.declarations)} declaration(s)")
      source = result
    tracer.end_phase()
    return source
