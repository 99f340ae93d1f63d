"""
CLI Command Handlers Facade.

Re-exports the handlers from `import_switcheroo.cli.handlers` so the entry
point (and tests patching it) depend on a single module.
"""

from import_switcheroo.cli.handlers.migrate import (
  handle_migrate,
  _collect_files,
  _migrate_single_file,
  _print_batch_summary,
)
from import_switcheroo.cli.handlers.rules import handle_rules

__all__ = [
  "_collect_files",
  "_migrate_single_file",
  "_print_batch_summary",
  "handle_migrate",
  "handle_rules",
]
