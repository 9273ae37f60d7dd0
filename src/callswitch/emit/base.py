"""
Target Emitter Protocol.

Defines the interface of backends consuming the finished IR and producing
target source text.
"""

from abc import ABC, abstractmethod

from callswitch.ir.nodes import IRFile


class TargetEmitter(ABC):
  """
  Abstract base class for target emission adapters.
  """

  @abstractmethod
  def emit(self, ir_file: IRFile) -> str:
    """
    Renders an IR file as target source code.

    Args:
        ir_file (IRFile): The optimized IR of one compilation unit.

    Returns:
        str: The generated source text.
    """
    pass
