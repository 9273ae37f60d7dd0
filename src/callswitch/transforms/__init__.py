"""
Transform Engine Package.

``SourceTransformer`` is composed of mixins, each lowering one family of
source nodes:
- Declarations: top-level bindings and actions.
- Calls: calls and member accesses, through the resolution chain.
- Expressions: constants, lambdas, bindings, control flow, operators.
"""

from callswitch.transforms.base import BaseTransformer
from callswitch.transforms.calls import CallMixin
from callswitch.transforms.declarations import DeclarationMixin
from callswitch.transforms.expressions import ExpressionMixin
from callswitch.transforms.resolution import CallResolver, Resolution, passthrough


class SourceTransformer(
  DeclarationMixin,
  CallMixin,
  ExpressionMixin,
  BaseTransformer,
):
  """
  The source-to-IR transformer used by the ``Compiler``.
  """

  pass


__all__ = ["CallResolver", "Resolution", "SourceTransformer", "passthrough"]
