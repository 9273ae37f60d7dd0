"""
Target Emission.

Backends turning the finished IR into target source text.
"""

from callswitch.emit.base import TargetEmitter
from callswitch.emit.python import PythonEmitter, safe_name
from callswitch.emit.template import substitute

__all__ = ["TargetEmitter", "PythonEmitter", "safe_name", "substitute"]
