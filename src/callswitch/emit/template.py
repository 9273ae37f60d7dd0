"""
Raw-Emit Template Substitution.

Templates reference their arguments with zero-indexed ``$N`` placeholders.
Every occurrence of a placeholder is replaced verbatim with the rendering of
the matching argument; ``$10`` is placeholder ten, not ``$1`` followed by
``0``.
"""

import re
from typing import Sequence

PLACEHOLDER = re.compile(r"\$(\d+)")


def substitute(template: str, rendered_args: Sequence[str]) -> str:
  """
  Replaces placeholders in ``template`` with ``rendered_args``.

  Args:
      template: Target fragment (e.g. ``"math.floor($0)"``).
      rendered_args: Target code of each argument, by position.

  Returns:
      str: The substituted fragment.

  Raises:
      ValueError: If a placeholder has no matching argument.
  """

  def repl(match: re.Match) -> str:
    idx = int(match.group(1))
    if idx >= len(rendered_args):
      raise ValueError(f"placeholder ${idx} has no argument ({len(rendered_args)} given)")
    return rendered_args[idx]

  return PLACEHOLDER.sub(repl, template)
