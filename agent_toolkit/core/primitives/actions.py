"""
Records produced by the agent loops: parsed decisions, iteration steps and run results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AgentAction:
    """
    Decision parsed from one model response: what the model thought, which
    action it picked and the text to hand to that action.
    """

    thought: str
    action: str
    action_input: str


@dataclass(frozen=True)
class AgentStep:
    """One iteration of an agent loop."""

    thought: str
    action: str
    action_input: str
    observation: Optional[str] = None
    final_answer: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass
class AgentResult:
    """
    Terminal summary of a run.

    On failure ``success`` is false, ``error`` holds the exception and
    ``steps`` contains whatever was recorded before the failure.
    """

    output: str
    steps: List[AgentStep] = field(default_factory=list)
    iterations: int = 0
    success: bool = True
    error: Optional[BaseException] = None
    execution_time: float = 0.0
