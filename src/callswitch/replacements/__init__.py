"""
Built-in Replacements Package.

Automatically discovers the rule modules of this package so each one can
register its ``@builtin`` rules; adding a file (e.g. ``system_text.py``) is
enough to extend the default table.
"""

import importlib
import pkgutil
from pathlib import Path

from callswitch.replacements.table import BuiltinReplacements, builtin, builtin_keys

_pkg_dir = Path(__file__).parent

for _, _module_name, _ in pkgutil.iter_modules([str(_pkg_dir)]):
  if _module_name.startswith("_") or _module_name == "table":
    continue
  importlib.import_module(f".{_module_name}", package=__name__)

__all__ = ["BuiltinReplacements", "builtin", "builtin_keys"]
