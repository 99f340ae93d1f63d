"""
Orchestration Engine for Import Migration.

This module provides the `MigrationEngine`, the driver that rewrites the import
declarations of one source file according to a mapping table.

The pipeline for a file is a single linear pass:

1.  **Extension Gate**: Files whose extension is not handled are returned unchanged.
2.  **Parsing**: The backend turns the text into a `Program`.
3.  **Rewriting**: For each rule (table order), for each import declaration
    (source order), the planner decides which bindings move. The declaration is
    shrunk to its kept bindings or removed; replacement bindings are collected
    in a per-file `ImportAggregator`; deprecated bindings leave a comment.
4.  **Flush**: One new declaration per aggregated destination path is inserted
    at the top of the body, in first-encountered order.
5.  **Rendering**: The backend prints the tree. A file without any edit is
    returned as the original text.

The engine holds no per-file state between calls, so a single instance can be
shared across files (and threads).
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from import_switcheroo.config import RuntimeConfig
from import_switcheroo.core.aggregator import ImportAggregator
from import_switcheroo.core.backend import SourceBackend, TypeScriptBackend
from import_switcheroo.core.nodes import ImportDeclaration, Program, RawChunk
from import_switcheroo.core.planner import (
  DeclarationPlan,
  MappingConfigurationError,
  deprecation_comment,
  plan_declaration,
)
from import_switcheroo.core.printer import print_import
from import_switcheroo.core.result import MigrationResult
from import_switcheroo.core.tracer import TraceLogger
from import_switcheroo.mappings.loader import load_mappings
from import_switcheroo.mappings.schema import ImportMapping

PathLike = Union[str, Path]


class MigrationEngine:
  """
  Rewrites imports of a single file per call.
  """

  def __init__(
    self,
    mappings: Optional[Sequence[ImportMapping]] = None,
    config: Optional[RuntimeConfig] = None,
    backend: Optional[SourceBackend] = None,
  ):
    """
    Initializes the Engine.

    Args:
        mappings: Rule table. Defaults to ``config.mapping_file`` if set, else the
            built-in Wasp 0.11 -> 0.12 table.
        config: Runtime configuration. Defaults to ``RuntimeConfig()``.
        backend: Parser/printer implementation. Defaults to `TypeScriptBackend`
            using ``config.line_width``.
    """
    self.config = config or RuntimeConfig()
    if mappings is None:
      mappings = load_mappings(self.config.mapping_file)
    self.mappings = tuple(mappings)
    self.backend = backend or TypeScriptBackend(line_width=self.config.line_width)

  def accepts(self, path: PathLike) -> bool:
    """
    Checks whether a file is rewritten at all.

    Args:
        path: File path (only the extension is inspected).

    Returns:
        bool: True if the extension is one of ``config.extensions``.
    """
    return Path(path).suffix.lower() in self.config.extensions

  def transform(self, source: str, path: PathLike, tracer: Optional[TraceLogger] = None) -> str:
    """
    Rewrites a file's imports, raising on failure.

    Args:
        source: File contents.
        path: File path, used for the extension gate.
        tracer: Optional event recorder.

    Returns:
        str: The rewritten text, or ``source`` itself if nothing changed or
        the file type is not handled.

    Raises:
        SyntaxError: If the source cannot be parsed.
        MappingConfigurationError: If a rule cannot name a replacement import.
    """
    if not self.accepts(path):
      return source

    tracer = tracer or TraceLogger()

    tracer.start_phase("Parsing", str(path))
    program = self.backend.parse(source)
    tracer.end_phase()

    tracer.start_phase("Rewriting", f"{len(self.mappings)} rules")
    changed = self._rewrite(program, tracer)
    tracer.end_phase()

    if not changed:
      return source

    tracer.start_phase("Rendering")
    code = self.backend.render(program)
    tracer.end_phase()
    return code

  def run(self, source: str, path: PathLike) -> MigrationResult:
    """
    Rewrites a file's imports, capturing failures in the result.

    Args:
        source: File contents.
        path: File path, used for the extension gate.

    Returns:
        MigrationResult: Rewritten code, status flags, errors and trace events.
    """
    if not self.accepts(path):
      return MigrationResult(code=source, skipped=True)

    tracer = TraceLogger()
    try:
      code = self.transform(source, path, tracer)
    except SyntaxError as e:
      return MigrationResult(
        code=source, errors=[f"Parse Error: {e}"], success=False, trace_events=tracer.export()
      )
    except MappingConfigurationError as e:
      return MigrationResult(
        code=source, errors=[f"Configuration Error: {e}"], success=False, trace_events=tracer.export()
      )

    return MigrationResult(code=code, changed=code != source, trace_events=tracer.export())

  def _rewrite(self, program: Program, tracer: TraceLogger) -> bool:
    """
    Applies every rule to every declaration, then flushes the aggregator.

    Returns:
        bool: True if the tree was modified.
    """
    aggregator = ImportAggregator()
    changed = False

    for mapping in self.mappings:
      for decl in program.find(ImportDeclaration, lambda d: bool(d.specifiers)):
        plan = plan_declaration(decl, mapping)
        if plan is None:
          continue
        self._apply(program, plan, aggregator, tracer)
        changed = True

    index = _insertion_index(program)
    for path, specifiers in aggregator.items():
      new_decl = self.backend.make_import(path, specifiers, program.newline)
      program.insert(index, new_decl)
      tracer.log_action("inserted", path, print_import(new_decl, self.config.line_width))
      index += 1

    return changed

  def _apply(
    self,
    program: Program,
    plan: DeclarationPlan,
    aggregator: ImportAggregator,
    tracer: TraceLogger,
  ) -> None:
    decl = plan.declaration
    rule = plan.mapping.describe()
    tracer.log_match(rule, decl.source, [s.name for s in plan.matched])

    if plan.removes_declaration:
      program.remove(decl)
      tracer.log_action("removed", decl.source)
    else:
      decl.replace_specifiers(plan.kept)
      tracer.log_action("shrunk", decl.source, ", ".join(s.name for s in plan.kept))

    if plan.mapping.new is None:
      program.add_comment(deprecation_comment(plan.mapping, plan.matched))
      tracer.log_deprecation(rule, [s.name for s in plan.matched])
      return

    for specifier in plan.replacements:
      aggregator.add(plan.mapping.new.path, specifier)


def _insertion_index(program: Program) -> int:
  """
  Body index where new declarations go.

  Blank lines separating a header (directives) from the rest stay above the
  inserted imports.
  """
  if program.header and program.body:
    first = program.body[0]
    if isinstance(first, RawChunk) and not first.text.strip():
      return 1
  return 0
