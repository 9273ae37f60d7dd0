"""
Compilation Trace Logger.

Records the step-by-step execution of one compilation run:
1. Lifecycle phases (AST hooks, transform walk, passes, emission).
2. Call-site resolutions (which extension, built-in or pass-through owned it).
3. Whole-tree mutations performed by AST-transform extensions.
4. Warnings and the fatal error of a failed run.

Each run owns its own ``TraceLogger``; ``export()`` yields plain dicts
suitable for JSON serialization. Events are nested under the phase that was
active when they were recorded.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  RESOLUTION = "resolution"
  AST_MUTATION = "ast_mutation"
  WARNING = "warning"


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
  Append-only event log with a stack of open phases.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._phase_stack: List[str] = []

  @property
  def current_phase(self) -> Optional[str]:
    return self._phase_stack[-1] if self._phase_stack else None

  def _record(
    self,
    evt_type: TraceEventType,
    description: str,
    metadata: Optional[Dict[str, Any]] = None,
    parent_id: Optional[str] = None,
  ) -> str:
    event = TraceEvent(
      id=uuid.uuid4().hex,
      type=evt_type,
      timestamp=time.time(),
      description=description,
      parent_id=parent_id if parent_id is not None else self.current_phase,
      metadata=metadata or {},
    )
    self._events.append(event)
    return event.id

  # --- Phases ---

  def start_phase(self, name: str, description: str = "") -> str:
    """Opens a phase nested in the current one. Returns the phase ID."""
    phase_id = self._record(TraceEventType.PHASE_START, name, {"detail": description})
    self._phase_stack.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Closes the innermost open phase; no-op when none is open."""
    if self._phase_stack:
      closed = self._phase_stack.pop()
      self._record(TraceEventType.PHASE_END, "End Phase", parent_id=closed)

  def end_all_phases(self) -> None:
    """Closes every open phase, innermost first (used when a run aborts)."""
    while self._phase_stack:
      self.end_phase()

  # --- Events ---

  def log_resolution(self, call_site: str, source: str, handler: Optional[str], location: str) -> None:
    """Logs which link of the resolution chain claimed a call site."""
    self._record(
      TraceEventType.RESOLUTION,
      f"{call_site} -> {source}",
      {"call_site": call_site, "source": source, "handler": handler, "location": location},
    )

  def log_mutation(self, extension: str, detail: str) -> None:
    """Logs a whole-tree rewrite performed by an extension."""
    self._record(TraceEventType.AST_MUTATION, f"Transformed by {extension}", {"detail": detail})

  def log_warning(self, message: str) -> None:
    self._record(TraceEventType.WARNING, message, {"level": "warning"})

  # --- Output ---

  def events_of(self, evt_type: TraceEventType) -> List[TraceEvent]:
    return [e for e in self._events if e.type == evt_type]

  def export(self) -> List[Dict[str, Any]]:
    return [asdict(event) for event in self._events]
