"""Domain models for abview.

Read-only stand-ins for the experiment service's entities. The view models
only read attributes from these, so any object with the same attribute
names works in their place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class ExperimentState(str, Enum):
    """Lifecycle state of an experiment."""

    DRAFT = "DRAFT"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    TERMINATED = "TERMINATED"
    DELETED = "DELETED"


# ============================================================================
# Experiment Domain
# ============================================================================


@dataclass(frozen=True)
class Experiment:
    """Domain model for an experiment."""

    id: UUID | str
    application_name: str
    label: str | None
    state: ExperimentState
    description: str | None = None
    creation_time: datetime | None = None
    modification_time: datetime | None = None


@dataclass(frozen=True)
class Bucket:
    """Domain model for a bucket (one arm of an experiment)."""

    label: str
    experiment_id: UUID | str
    allocation_percent: float
    is_control: bool = False
    description: str | None = None
    payload: str | None = None
