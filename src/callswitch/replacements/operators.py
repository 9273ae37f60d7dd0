"""
Built-ins for core conversion operators (``int x``, ``float x``, ``string x``).
"""

from callswitch.ir.info import ApplyInfo
from callswitch.ir.nodes import Apply, Identifier
from callswitch.replacements._helpers import expect_args
from callswitch.replacements.table import builtin

OWNER = "Microsoft.FSharp.Core.Operators"

_CONVERSIONS = {
  "ToInt": "int",
  "ToInt32": "int",
  "ToDouble": "float",
  "ToString": "str",
}


@builtin(OWNER, *_CONVERSIONS)
def conversion(options, info: ApplyInfo):
  args = expect_args(info, 1)
  return Apply(Identifier(_CONVERSIONS[info.member_name]), args, type=info.return_type, range=info.range)
