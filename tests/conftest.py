"""
Shared fixtures.

- ``src`` is put on ``sys.path`` so the package imports without installation.
- ``snapshot`` compares rendered CLI output with files under ``__snapshots__``.
- ``captured_console`` redirects rich output and log records into a buffer.
"""

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from import_switcheroo.utils.console import reset_console, set_console  # noqa: E402


def _normalize(text: str) -> str:
  return "\n".join(line.rstrip() for line in text.replace("\r\n", "\n").split("\n"))


class SnapshotAssert:
  """
  Stores one text file per test next to the test module.

  Lines are compared without trailing whitespace. ``--update-snapshots`` records
  new snapshots and rewrites existing ones; otherwise a missing snapshot fails.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.path = Path(request.node.fspath).parent / "__snapshots__" / f"{request.node.name}.txt"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str) -> None:
    content = _normalize(content)
    if self.update_mode:
      self.path.parent.mkdir(parents=True, exist_ok=True)
      self.path.write_text(content, encoding="utf-8")
      return
    if not self.path.exists():
      pytest.fail(f"Missing snapshot {self.path.name}; run with --update-snapshots to record it.")

    expected = _normalize(self.path.read_text(encoding="utf-8"))
    assert content == expected, f"{self.path.name} is out of date; rerun with --update-snapshots to accept."


@pytest.fixture
def snapshot(request):
  return SnapshotAssert(request)


@pytest.fixture
def captured_console():
  """
  Yields:
      io.StringIO: Everything printed or logged during the test.
  """
  buffer = io.StringIO()
  set_console(Console(file=buffer, width=200, color_system=None, force_terminal=False))
  yield buffer
  reset_console()


def pytest_addoption(parser):
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Rewrite stored snapshots")
