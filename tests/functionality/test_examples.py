"""
End-to-end tests over the fixture pairs in `tests/examples/`.

Each directory holds `input-N.ts` and the expected `output-N.ts`.
"""

from pathlib import Path

import pytest

from import_switcheroo.core.engine import MigrationEngine

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


def _pairs():
  for input_file in sorted(EXAMPLES_DIR.glob("*/input-*.ts")):
    output_file = input_file.with_name(input_file.name.replace("input-", "output-"))
    yield pytest.param(input_file, output_file, id=f"{input_file.parent.name}/{input_file.stem}")


@pytest.mark.parametrize("input_file, output_file", list(_pairs()))
def test_fixture(input_file, output_file):
  engine = MigrationEngine()
  source = input_file.read_text(encoding="utf-8")
  expected = output_file.read_text(encoding="utf-8")

  result = engine.run(source, input_file)

  assert result.success, result.errors
  assert result.code == expected


@pytest.mark.parametrize("input_file, output_file", list(_pairs()))
def test_fixture_output_is_stable(input_file, output_file):
  engine = MigrationEngine()
  expected = output_file.read_text(encoding="utf-8")
  result = engine.run(expected, output_file)
  assert result.status == "unmodified"
