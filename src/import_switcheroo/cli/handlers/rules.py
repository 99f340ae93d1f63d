"""CLI handler for the 'rules' command."""

from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.table import Table

from import_switcheroo.mappings.loader import load_mappings
from import_switcheroo.mappings.schema import format_name, format_path
from import_switcheroo.utils.console import console, log_error


def handle_rules(mapping_file: Optional[Path] = None) -> int:
  """
  Lists the active mapping table.

  Args:
      mapping_file: JSON table to show instead of the built-in one.

  Returns:
      int: Exit code.
  """
  try:
    mappings = load_mappings(mapping_file)
  except (ValueError, OSError) as e:
    log_error(f"Cannot load mappings: {e}")
    return 1

  table = Table(title=f"Import Mappings ({len(mappings)} rules)")
  table.add_column("#", justify="right", style="dim")
  table.add_column("Old Path", style="cyan")
  table.add_column("Old Name")
  table.add_column("New Path", style="green")
  table.add_column("New Name")
  table.add_column("Type", justify="center")

  for index, mapping in enumerate(mappings, start=1):
    old_path = escape(format_path(mapping.old.path))
    old_name = format_name(mapping.old.name)
    if mapping.new is None:
      table.add_row(str(index), old_path, old_name, "[yellow]removed[/yellow]", "", "")
      continue
    is_type = "" if mapping.new.is_type is None else ("yes" if mapping.new.is_type else "no")
    table.add_row(str(index), old_path, old_name, mapping.new.path, format_name(mapping.new.name), is_type)

  console.print(table)
  return 0
