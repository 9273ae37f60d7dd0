"""
Compiler Options.

Immutable configuration threaded explicitly into every hook call. A single
``CompilerOptions`` instance is shared by all stages of one compilation run
and is never mutated; independent runs may share it as well.
"""

import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from callswitch.enums import ModuleFormat
from callswitch.plugins.extension import Extension

T = TypeVar("T", bound=BaseModel)


class CompilerOptions(BaseModel):
  """
  Process-wide configuration for a compilation run.
  """

  model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

  module_format: ModuleFormat = Field(ModuleFormat.MODULE, description="Shape of the emitted module.")
  extensions: Tuple[Extension, ...] = Field(
    default=(),
    description="Registered extensions; order is priority order.",
  )
  target_flags: Mapping[str, Any] = Field(
    default_factory=dict,
    validate_default=True,
    description="Target environment flags.",
  )
  plugin_settings: Mapping[str, Any] = Field(
    default_factory=dict,
    validate_default=True,
    description="Configuration passed to extensions.",
  )

  @field_validator("target_flags", "plugin_settings", mode="after")
  @classmethod
  def freeze_mapping(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
    """Hooks read the same mappings for the whole run; they must not write to them."""
    return MappingProxyType(dict(v))

  @field_serializer("target_flags", "plugin_settings")
  def dump_mapping(self, v: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(v)

  @field_validator("module_format", mode="before")
  @classmethod
  def validate_module_format(cls, v: Any) -> Any:
    """
    Accepts the format name case-insensitively.

    Raises:
        ValueError: If the format is unknown.
    """
    if isinstance(v, str):
      v_clean = v.lower().strip()
      known = [f.value for f in ModuleFormat]
      if v_clean not in known:
        raise ValueError(f"Unknown module format: '{v_clean}'. Supported formats: {known}")
      return v_clean
    return v

  def flag(self, key: str, default: Any = None) -> Any:
    """Reads a target environment flag."""
    return self.target_flags.get(key, default)

  def parse_plugin_settings(self, schema: Type[T]) -> T:
    """
    Validates the plugin settings against an extension-specific schema.

    Only keys declared by ``schema`` are considered, so extensions sharing
    one settings table do not trip over each other's keys.

    Args:
        schema: The Pydantic model class describing the settings.

    Returns:
        An instance of ``schema`` populated from the settings.

    Raises:
        ValueError: If validation fails.
    """
    relevant = {k: v for k, v in self.plugin_settings.items() if k in schema.model_fields}
    try:
      return schema.model_validate(relevant)
    except ValidationError as e:
      raise ValueError(f"Plugin configuration validation failed: {e}")

  @classmethod
  def load(
    cls,
    extensions: Sequence[Extension] = (),
    module_format: Optional[str] = None,
    target_flags: Optional[Dict[str, Any]] = None,
    plugin_settings: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "CompilerOptions":
    """
    Loads configuration from ``[tool.callswitch]`` in the nearest
    ``pyproject.toml`` and overrides it with explicit arguments.

    Args:
        extensions: Extensions for this run, in priority order.
        module_format: Override for the module format.
        target_flags: Flags merged over the file's ``target_flags``.
        plugin_settings: Settings merged over the file's ``plugin_settings``.
        search_path: Directory to start searching for the TOML file.

    Returns:
        CompilerOptions: The resolved, frozen options.
    """
    toml_config = _load_toml_settings(search_path or Path.cwd())

    final_format = module_format or toml_config.get("module_format", ModuleFormat.MODULE.value)
    final_flags = {**toml_config.get("target_flags", {}), **(target_flags or {})}
    final_plugins = {**toml_config.get("plugin_settings", {}), **(plugin_settings or {})}

    return cls(
      module_format=final_format,
      extensions=tuple(extensions),
      target_flags=final_flags,
      plugin_settings=final_plugins,
    )


def _load_toml_settings(start_path: Path) -> Dict[str, Any]:
  """
  Searches ``start_path`` and its parents for ``pyproject.toml`` and returns
  its ``[tool.callswitch]`` table (empty when absent).
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      with open(toml_path, "rb") as f:
        data = tomllib.load(f)
      return data.get("tool", {}).get("callswitch", {})

  return {}
