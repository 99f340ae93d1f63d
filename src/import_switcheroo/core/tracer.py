"""
Migration Trace Logger.

Records the step-by-step execution of one engine run:

1. Lifecycle phases (Parsing, Rewriting, Rendering).
2. Rule matches (``@wasp/config:<default> -> wasp/server:config`` hit a declaration).
3. Import actions (declaration shrunk, removed, or inserted).
4. Deprecations (bindings dropped without replacement).

The output is a list of plain dictionaries suitable for JSON serialization.
Each `MigrationEngine.run` call creates its own logger, so nothing is shared
between files.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  RULE_MATCH = "rule_match"
  IMPORT_ACTION = "import_action"
  DEPRECATION = "deprecation"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records migration events of a single run.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g. 'Rewriting'). Returns the phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_match(self, rule: str, source: str, names: List[str]) -> None:
    """Logs a rule hitting a declaration."""
    self._log_simple(
      TraceEventType.RULE_MATCH,
      f"Matched {rule}",
      {"rule": rule, "source": source, "names": names},
    )

  def log_action(self, action: str, source: str, detail: str = "") -> None:
    """
    Logs a change to the import list.

    Args:
        action: One of ``removed``, ``shrunk``, ``inserted``.
        source: Module path of the affected declaration.
        detail: Free-form description (e.g. the printed declaration).
    """
    self._log_simple(
      TraceEventType.IMPORT_ACTION,
      f"{action.capitalize()} import of '{source}'",
      {"action": action, "source": source, "detail": detail},
    )

  def log_deprecation(self, rule: str, names: List[str]) -> None:
    self._log_simple(TraceEventType.DEPRECATION, f"Dropped {', '.join(names)}", {"rule": rule, "names": names})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> None:
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
