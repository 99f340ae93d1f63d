"""
Main Entry Point for the import-switcheroo CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `import_switcheroo.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from import_switcheroo import __version__
from import_switcheroo.cli import commands


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="import-switcheroo: Wasp 0.11 -> 0.12 import migration")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: MIGRATE ---
  cmd_mig = subparsers.add_parser("migrate", help="Rewrite imports of JS/TS files or directories in place")
  cmd_mig.add_argument("paths", type=Path, nargs="+", help="Input source files or directories")
  cmd_mig.add_argument(
    "--dry",
    action="store_true",
    default=None,
    help="Do not write files back (Overrides config)",
  )
  cmd_mig.add_argument(
    "--print",
    dest="print_output",
    action="store_true",
    default=None,
    help="Print rewritten code to the console (Overrides config)",
  )
  cmd_mig.add_argument("--mappings", type=Path, default=None, help="JSON mapping table (default: built-in)")
  cmd_mig.add_argument("--json-trace", type=Path, default=None, help="Dump execution traces to a JSON file.")
  cmd_mig.add_argument(
    "--ext",
    nargs="+",
    default=None,
    help="File extensions to rewrite (default: .js .jsx .ts .tsx, or from toml)",
  )

  # --- Command: RULES ---
  cmd_rules = subparsers.add_parser("rules", help="List the active mapping table")
  cmd_rules.add_argument("--mappings", type=Path, default=None, help="JSON mapping table (default: built-in)")

  args = parser.parse_args(argv)

  if args.command == "migrate":
    return commands.handle_migrate(
      args.paths, args.dry, args.print_output, args.mappings, args.json_trace, args.ext
    )

  elif args.command == "rules":
    return commands.handle_rules(args.mappings)

  return 1


if __name__ == "__main__":
  sys.exit(main())
