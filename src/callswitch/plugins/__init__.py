"""
Plugins Package.

Extension descriptors, the decorators that build them, and the ordered
registry the Transform Engine iterates at each hook point.
"""

from callswitch.plugins.extension import Extension, ast_transform, call_replacement
from callswitch.plugins.registry import PluginRegistry

__all__ = ["Extension", "PluginRegistry", "ast_transform", "call_replacement"]
