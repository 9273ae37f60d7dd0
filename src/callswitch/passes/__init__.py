"""
IR Optimization Passes.

Passes take an ``IRFile`` and return a new one; they never mutate nodes.
"""

from callswitch.passes.prune import prune_untyped_empty_objects

DEFAULT_PASSES = (prune_untyped_empty_objects,)

__all__ = ["DEFAULT_PASSES", "prune_untyped_empty_objects"]
