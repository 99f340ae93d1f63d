from .migrate import handle_migrate, _collect_files, _migrate_single_file, _print_batch_summary
from .rules import handle_rules

__all__ = [
  "_collect_files",
  "_migrate_single_file",
  "_print_batch_summary",
  "handle_migrate",
  "handle_rules",
]
