"""
Migrate Command Handler.

This module implements the logic for the `import-switcheroo migrate` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Mapping table loading.
3. File collection (files and recursively expanded directories).
4. Per-file rewriting via the Engine, writing back unless in dry mode.
5. Trace dumping and the batch summary.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from import_switcheroo.config import RuntimeConfig
from import_switcheroo.core.engine import MigrationEngine
from import_switcheroo.core.result import MigrationResult
from import_switcheroo.utils.console import console, log_error, log_info, log_success, log_warning

# Directory names never descended into.
_SKIPPED_DIRS = {"node_modules"}


def handle_migrate(
  paths: List[Path],
  dry: Optional[bool] = None,
  print_output: Optional[bool] = None,
  mapping_file: Optional[Path] = None,
  json_trace_path: Optional[Path] = None,
  extensions: Optional[List[str]] = None,
) -> int:
  """
  Handles the 'migrate' command execution.

  Args:
      paths: Files and/or directories to migrate.
      dry: If True, files are not written back.
      print_output: If True, rewritten code is printed to the console.
      mapping_file: JSON mapping table overriding the built-in one.
      json_trace_path: Optional path to dump execution traces (keyed by file) as JSON.
      extensions: Override for the handled file extensions.

  Returns:
      int: Exit code (0 if no file failed, 1 otherwise).
  """
  missing = [p for p in paths if not p.exists()]
  for p in missing:
    log_error(f"Input not found: [path]{escape(str(p))}[/path]")
  if missing:
    return 1

  first = paths[0]
  try:
    config = RuntimeConfig.load(
      extensions=extensions,
      mapping_file=mapping_file,
      dry_run=dry,
      print_output=print_output,
      search_path=first if first.is_dir() else first.parent,
    )
    engine = MigrationEngine(config=config)
  except (ValueError, OSError) as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  files = _collect_files(paths, config.extensions)
  if not files:
    log_warning(f"No files with extensions {', '.join(config.extensions)} found.")
    return 0

  log_info(f"Processing {len(files)} file(s){' (dry run)' if config.dry_run else ''}...")

  batch_results: Dict[str, MigrationResult] = {}
  for file_path in files:
    batch_results[str(file_path)] = _migrate_single_file(file_path, engine, config)

  if json_trace_path:
    _write_trace(json_trace_path, batch_results)

  _print_batch_summary(batch_results)
  return 1 if any(r.status == "error" for r in batch_results.values()) else 0


def _collect_files(paths: List[Path], extensions: List[str]) -> List[Path]:
  """
  Expands the CLI paths into the list of files to process.

  Files given explicitly are kept whatever their extension (the engine reports
  them as skipped). Directories are walked recursively, skipping
  ``node_modules`` and hidden directories, and only yield handled extensions.

  Args:
      paths: CLI paths, in order.
      extensions: Handled extensions (lower-case, with dot).

  Returns:
      List[Path]: Unique files, in discovery order.
  """
  seen = set()
  files: List[Path] = []

  def _add(p: Path) -> None:
    key = p.resolve()
    if key not in seen:
      seen.add(key)
      files.append(p)

  for path in paths:
    if path.is_file():
      _add(path)
      continue
    for root, dirnames, filenames in os.walk(path):
      # Pruned in place so skipped trees are never listed.
      dirnames[:] = sorted(d for d in dirnames if d not in _SKIPPED_DIRS and not d.startswith("."))
      for name in sorted(filenames):
        candidate = Path(root) / name
        if candidate.suffix.lower() in extensions:
          _add(candidate)
  return files


def _migrate_single_file(file_path: Path, engine: MigrationEngine, config: RuntimeConfig) -> MigrationResult:
  """
  Runs the engine on one file and writes the result back.

  Args:
      file_path: File to migrate.
      engine: Shared engine.
      config: Runtime configuration (dry run / print flags).

  Returns:
      MigrationResult: Result object containing status and code.
  """
  try:
    with open(file_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read [path]{escape(str(file_path))}[/path]: {escape(str(e))}")
    return MigrationResult(success=False, errors=[f"Read Error: {e}"])

  result = engine.run(code, file_path)

  if not result.success:
    log_error(f"[path]{escape(str(file_path))}[/path]: {escape('; '.join(result.errors))}")
    return result

  if result.changed:
    if config.print_output:
      console.print(Syntax(result.code, "tsx", line_numbers=False))
    if not config.dry_run:
      try:
        with open(file_path, "wt", encoding="utf-8") as f:
          f.write(result.code)
      except OSError as e:
        log_error(f"Failed to write [path]{escape(str(file_path))}[/path]: {escape(str(e))}")
        return MigrationResult(code=result.code, success=False, errors=[f"Write Error: {e}"])
    log_success(f"Migrated: [path]{escape(str(file_path))}[/path]")

  return result


def _write_trace(json_trace_path: Path, results: Dict[str, MigrationResult]) -> None:
  traces = {name: res.trace_events for name, res in results.items() if res.trace_events}
  try:
    json_trace_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_trace_path, "wt", encoding="utf-8") as f:
      json.dump(traces, f, indent=2)
    log_info(f"Trace saved to [path]{json_trace_path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {e}")


def _print_batch_summary(results: Dict[str, MigrationResult]) -> None:
  """
  Renders a summary of migration results to the console.

  Args:
      results: Dictionary mapping filenames to migration results.
  """
  counts = {"ok": 0, "unmodified": 0, "skipped": 0, "error": 0}
  for res in results.values():
    counts[res.status] += 1

  summary = (
    f"{counts['ok']} ok, {counts['unmodified']} unmodified, {counts['skipped']} skipped, {counts['error']} error"
  )

  if counts["error"] == 0:
    log_success(f"Batch Complete: {summary}.")
    return

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.status != "error":
      continue
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), "❌ Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {summary}.")
