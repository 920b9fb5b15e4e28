"""
Refactoring Trace Logger.

This module provides the infrastructure to record the step-by-step execution
of the engine. It captures:
1. Lifecycle Phases (Parsing, Passes, Rule traversals).
2. Committed changes (``removed redundant `public` ``).
3. Warnings (pass limit reached, failed files).

The output is a structured list of Event Log dictionaries suitable for JSON serialization.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  EDITS_STAGED = "edits_staged"
  CHANGE_APPLIED = "change_applied"
  ANALYSIS_WARNING = "analysis_warning"


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
  Records engine events for later inspection.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g., 'Pass 2'). Returns Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None

    event = TraceEvent(
      id=phase_id,
      type=TraceEventType.PHASE_START,
      timestamp=time.time(),
      description=name,
      parent_id=parent,
      metadata={"detail": description},
    )
    self._events.append(event)
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    event = TraceEvent(
      id=str(uuid.uuid4()),
      type=TraceEventType.PHASE_END,
      timestamp=time.time(),
      description="End Phase",
      parent_id=phase_id,
    )
    self._events.append(event)

  def end_all_phases(self):
    while self._active_phases:
      self.end_phase()

  def log_staged(self, rule_name: str, edits: List[str]):
    """Logs the edits a rule staged during one traversal."""
    self._log_simple(
      TraceEventType.EDITS_STAGED,
      f"{rule_name} staged {len(edits)} edits",
      {"rule": rule_name, "edits": edits},
    )

  def log_change(self, description: str, unit_name: str):
    """Logs a committed change."""
    self._log_simple(TraceEventType.CHANGE_APPLIED, description, {"unit": unit_name})

  def log_warning(self, message: str):
    self._log_simple(TraceEventType.ANALYSIS_WARNING, message, {"level": "warning"})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]


_GLOBAL_TRACER = TraceLogger()


def get_tracer() -> TraceLogger:
  return _GLOBAL_TRACER


def reset_tracer():
  global _GLOBAL_TRACER
  _GLOBAL_TRACER = TraceLogger()
