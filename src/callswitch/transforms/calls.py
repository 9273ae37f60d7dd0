"""
Call Lowering Mixin.

Every call or member access on a resolved symbol goes through the
extension-resolution protocol. Receiver and arguments are lowered first so
handlers only ever see IR, never source syntax.
"""

from typing import Optional, Tuple

from callswitch.ir import types as T
from callswitch.ir.info import ApplyInfo, lambda_arity
from callswitch.ir.nodes import Expr
from callswitch.source import ast as src


class CallMixin:
  """
  Assumed attributes on self:
      adapter (SourceAdapter): Source metadata queries.
      resolver (CallResolver): Resolution chain of the run.
      resolutions (List[Resolution]): Accumulated outcomes.
  """

  def transform_Call(self, node: src.Call) -> Expr:
    receiver = self.transform_expr(node.receiver) if node.receiver is not None else None
    args = tuple(self.transform_expr(a) for a in node.args)

    info = self.build_apply_info(node, receiver, args)
    resolution = self.resolver.resolve(info)
    self.resolutions.append(resolution)
    return resolution.expr

  def build_apply_info(self, node: src.Call, receiver: Optional[Expr], args: Tuple[Expr, ...]) -> ApplyInfo:
    """
    Builds the call site descriptor from a source call and its lowered parts.
    """
    member = node.member
    return_type = self.adapter.type_of(node)
    if isinstance(return_type, T.AnyType):
      return_type = self.adapter.declared_type(member)

    return ApplyInfo(
      owner_full_name=self.adapter.owner_full_name(node),
      member_name=self.adapter.member_name(node),
      member_kind=self.adapter.member_kind(node),
      callee=receiver,
      args=args,
      return_type=return_type,
      range=self.adapter.range_of(node),
      decorators=self.adapter.decorators(member),
      call_type_args=self.adapter.call_type_args(node),
      member_type_args=self.adapter.member_type_args(member),
      lambda_arg_arity=lambda_arity(args),
    )
