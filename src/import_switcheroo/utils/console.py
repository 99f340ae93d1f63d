"""
Console and Logging for the CLI.

Rich renderables (rule tables, rewritten code) go through the `console`
proxy. Per-file status lines go through the ``import_switcheroo`` logger, whose
`RichHandler` writes to whatever console the proxy currently wraps.

Tests swap the console with `set_console` and restore it with `reset_console`.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

logger = logging.getLogger("import_switcheroo")
logger.setLevel(logging.INFO)
logger.propagate = False

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "rule": "bold magenta",
  }
)

# Message prefix per level.
_PREFIXES = {
  logging.INFO: "ℹ️  ",
  SUCCESS_LEVEL_NUM: "✅ ",
  logging.WARNING: "⚠️  ",
  logging.ERROR: "❌ ",
}


class _ConsoleProxy:
  """
  Stable handle on the active `rich.console.Console`.

  Modules import ``console`` once; the wrapped Console can still be replaced
  later, and the logging handler is moved along with it.
  """

  def __init__(self) -> None:
    self._backend = Console(theme=_THEME)
    self._bind_logger()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    """
    Wraps another Console and re-targets the logger to it.

    Args:
        new_console (Console): The Console that receives all further output.
    """
    self._backend = new_console
    self._bind_logger()

  def reset(self) -> None:
    self.set_backend(Console(theme=_THEME))

  def _bind_logger(self) -> None:
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
      logger.removeHandler(handler)
    logger.addHandler(
      RichHandler(console=self._backend, show_time=False, show_path=False, markup=True, rich_tracebacks=True)
    )

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """Routes console and log output to ``new_console``."""
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def _log(level: int, msg: str) -> None:
  logger.log(level, f"{_PREFIXES[level]}{msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs a progress message.

  Args:
      msg (str): Message text; may contain rich markup such as ``[path]...[/path]``.
  """
  _log(logging.INFO, msg)


def log_success(msg: str) -> None:
  _log(SUCCESS_LEVEL_NUM, msg)


def log_warning(msg: str) -> None:
  _log(logging.WARNING, msg)


def log_error(msg: str) -> None:
  """
  Logs a failure (unreadable file, parse error, bad configuration).

  Args:
      msg (str): Message text; callers escape untrusted parts.
  """
  _log(logging.ERROR, msg)
