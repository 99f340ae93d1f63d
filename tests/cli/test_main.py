"""
Tests for CLI argument handling.

Verifies that:
1.  `migrate` forwards paths and flags to the handler (None when a flag is absent).
2.  `rules` forwards the mapping file.
3.  `--version` prints the package version.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from import_switcheroo import __version__
from import_switcheroo.cli.__main__ import main


@patch("import_switcheroo.cli.commands.handle_migrate", return_value=0)
def test_migrate_defaults(mock_handle):
  """
  Scenario: User runs `import-switcheroo migrate src/`.
  Expectation: Flags are None so TOML values are not overridden.
  """
  assert main(["migrate", "src/"]) == 0

  mock_handle.assert_called_once_with([Path("src/")], None, None, None, None, None)


@patch("import_switcheroo.cli.commands.handle_migrate", return_value=1)
def test_migrate_all_flags(mock_handle):
  code = main(
    [
      "migrate",
      "a.ts",
      "web/",
      "--dry",
      "--print",
      "--mappings",
      "rules.json",
      "--json-trace",
      "trace.json",
      "--ext",
      ".ts",
      "tsx",
    ]
  )

  assert code == 1
  mock_handle.assert_called_once_with(
    [Path("a.ts"), Path("web/")], True, True, Path("rules.json"), Path("trace.json"), [".ts", "tsx"]
  )


@patch("import_switcheroo.cli.commands.handle_rules", return_value=0)
def test_rules_command(mock_handle):
  main(["rules", "--mappings", "custom.json"])
  mock_handle.assert_called_once_with(Path("custom.json"))


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_command_required():
  with pytest.raises(SystemExit) as exc:
    main([])
  assert exc.value.code == 2
