"""
Central Logging and Console Utilities.

Compiler diagnostics are emitted through the ``callswitch`` logger of the
standard ``logging`` library and rendered by ``rich``.

The rich console behind that logger is reachable through a stable proxy
object, so embedding drivers (build tools, test suites) can redirect every
diagnostic into their own ``Console`` with ``set_console`` while modules
keep their import of ``console``.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "callswitch"

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme({"logging.level.success": "green"})

logger = logging.getLogger(LOGGER_NAME)


def _stderr_console() -> Console:
  return Console(theme=_THEME, stderr=True)


class _ConsoleProxy:
  """
  Stable handle on the active rich ``Console``.

  The proxy owns the single ``RichHandler`` attached to the package logger
  and re-targets it whenever the backend changes. The logger does not
  propagate, so host applications configuring the root logger never see
  duplicated compiler output.
  """

  def __init__(self) -> None:
    self._backend: Console = _stderr_console()
    self._handler: Optional[RichHandler] = None
    self._bind()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._bind()

  def reset(self) -> None:
    self.set_backend(_stderr_console())

  def _bind(self) -> None:
    if self._handler is not None:
      logger.removeHandler(self._handler)
    self._handler = RichHandler(
      console=self._backend,
      markup=True,
      show_path=False,
      show_time=False,
      rich_tracebacks=True,
    )
    logger.addHandler(self._handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

  def __getattr__(self, name: str) -> Any:
    # print, export_text, rule, ... all come from the backend
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects console output and compiler logging to ``new_console``.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Restores the default standard-error console."""
  console.reset()


def get_console() -> Console:
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs an informational message.

  Args:
      msg (str): The message content. May contain rich markup.
  """
  logger.info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  logger.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  logger.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  logger.error(f"❌ {msg}", extra={"markup": True})
