"""Shared pytest fixtures for abview tests."""

from datetime import datetime, timezone

import pytest

from abview.models.domain import Bucket, Experiment, ExperimentState


@pytest.fixture
def modification_time():
    """Fixed modification timestamp."""
    return datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def experiment(modification_time):
    """A running domain experiment."""
    return Experiment(
        id="exp1",
        application_name="app1",
        label="Checkout Test",
        state=ExperimentState.RUNNING,
        description="New checkout button",
        creation_time=datetime(2024, 2, 1, tzinfo=timezone.utc),
        modification_time=modification_time,
    )


@pytest.fixture
def buckets():
    """Control and treatment buckets splitting traffic evenly."""
    return [
        Bucket(
            label="A", experiment_id="exp1", allocation_percent=0.5, is_control=True
        ),
        Bucket(label="B", experiment_id="exp1", allocation_percent=0.5),
    ]
