"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Factories for call site descriptors and typed source trees.
- Console isolation so log output of one test never leaks into another.
"""

import sys
from pathlib import Path

import pytest
from rich.console import Console

# Add src to path so we can import 'callswitch' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from callswitch.config import CompilerOptions  # noqa: E402
from callswitch.enums import MemberKind  # noqa: E402
from callswitch.ir import types as T  # noqa: E402
from callswitch.ir.info import ApplyInfo, lambda_arity  # noqa: E402
from callswitch.source import ast as src  # noqa: E402
from callswitch.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture
def options():
  """Default options with no extensions."""
  return CompilerOptions()


@pytest.fixture
def make_info():
  """
  Factory for ``ApplyInfo``.

  Usage:
      info = make_info("System.Random", "Next", args=(Literal(10),))
  """

  def _make(owner, member, args=(), callee=None, kind=MemberKind.METHOD, return_type=T.ANY, **kwargs):
    kwargs.setdefault("lambda_arg_arity", lambda_arity(tuple(args)))
    return ApplyInfo(
      owner_full_name=owner,
      member_name=member,
      member_kind=kind,
      callee=callee,
      args=tuple(args),
      return_type=return_type,
      **kwargs,
    )

  return _make


@pytest.fixture
def source_call():
  """
  Factory for a source ``Call`` node on a resolved member.

  Usage:
      node = source_call("System.Math", "Abs", src.Const(value=-1, type=src.TypeRef(name="int")))
  """

  def _make(owner, member, *args, receiver=None, kind=MemberKind.METHOD, type_name="any", attributes=(), line=1):
    return src.Call(
      member=src.MemberRef(
        owner=owner, name=member, kind=kind, type=src.TypeRef(name=type_name), attributes=attributes
      ),
      receiver=receiver,
      args=tuple(args),
      type=src.TypeRef(name=type_name),
      range=src.Range(start_line=line, start_col=0, end_line=line, end_col=10),
    )

  return _make


@pytest.fixture
def source_file():
  """Factory wrapping expressions into a ``SourceFile`` of top-level actions."""

  def _make(*exprs, path="test.fs"):
    return src.SourceFile(path=path, declarations=tuple(src.Action(expr=e) for e in exprs))

  return _make


@pytest.fixture(autouse=True)
def quiet_console():
  """Routes log output into a recording console for the duration of a test."""
  console = Console(record=True, width=200, force_terminal=False)
  set_console(console)
  yield console
  reset_console()
