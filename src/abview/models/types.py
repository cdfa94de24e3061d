"""Pydantic view models for the experiment card UI.

ExperimentView wraps the basics of an Experiment with data the card view
needs but the domain objects don't carry: favorite flag, user totals and
per-bucket statistics. Statistics are computed elsewhere and only stored
here.

Every field is validated on construction and again on assignment, so a
required field can never be observed holding an invalid value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import (
    AfterValidator,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    computed_field,
)
from pydantic.alias_generators import to_camel

from abview.core.errors import InvalidArgumentError
from abview.models.domain import Bucket, Experiment, ExperimentState

logger = logging.getLogger(__name__)


def _non_empty(message: str) -> AfterValidator:
    """Reject values whose string form is empty."""

    def check(value: Any) -> Any:
        if not str(value):
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _not_negative(message: str) -> AfterValidator:
    """Reject values below zero. NaN is rejected as well."""

    def check(value: Any) -> Any:
        if not value >= 0:
            raise ValueError(message)
        return value

    return AfterValidator(check)


BucketLabel = Annotated[str, _non_empty("The label of a bucket can not be empty")]
ExperimentId = Annotated[
    UUID | str, _non_empty("Can not create ExperimentView without an experiment id")
]
AppName = Annotated[
    str, _non_empty("Application name can not be empty for ExperimentView")
]
AllocationPercent = Annotated[
    float, _not_negative("AllocationPercent can not be smaller than 0 for a bucket")
]
UserCount = Annotated[int, _not_negative("User count can not be smaller than 0")]
TotalNumberUsers = Annotated[
    int,
    _not_negative("Total number of users has to be equal or greater than zero"),
]


class ViewModel(BaseModel):
    """Base for view models.

    Re-validates on assignment and reports any rejection as
    InvalidArgumentError, including from model_validate*, model_copy and
    model_construct. Serialization aliases are camelCase, so
    model_dump(by_alias=True) yields the names the UI expects.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise self._rejected(e) from e

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as e:
            raise self._rejected(e) from e

    @classmethod
    def _rejected(cls, exc: ValidationError) -> InvalidArgumentError:
        error = InvalidArgumentError.from_validation_error(cls.__name__, exc)
        logger.debug(f"Rejected {cls.__name__}: {error.field}")
        return error

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> Any:
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as e:
            raise cls._rejected(e) from e

    @classmethod
    def model_validate_json(cls, json_data: str | bytes, **kwargs: Any) -> Any:
        try:
            return super().model_validate_json(json_data, **kwargs)
        except ValidationError as e:
            raise cls._rejected(e) from e

    @classmethod
    def model_validate_strings(cls, obj: Any, **kwargs: Any) -> Any:
        try:
            return super().model_validate_strings(obj, **kwargs)
        except ValidationError as e:
            raise cls._rejected(e) from e

    @classmethod
    def model_construct(cls, _fields_set: set[str] | None = None, **values: Any) -> Any:
        """Construct a view. Unlike BaseModel, this always validates."""
        return cls(**values)

    def model_copy(
        self,
        *,
        update: Mapping[str, Any] | None = None,
        deep: bool = False,
    ) -> Any:
        """Copy the view, re-validating any updated fields.

        Copies are always deep so the copy owns its buckets; deep is
        accepted for signature compatibility only.

        Raises:
            InvalidArgumentError: If an updated value is invalid.
        """
        copied = super().model_copy(deep=True)
        if not update:
            return copied
        data = {name: getattr(copied, name) for name in type(self).model_fields}
        data.update(update)
        validated = type(self)(**data)
        for name in type(self).__private_attributes__:
            setattr(validated, name, getattr(copied, name))
        return validated

    def __copy__(self) -> Any:
        return self.model_copy()


class BucketView(ViewModel):
    """Display data and statistics for one bucket.

    Only label, is_control and allocation_percent come from the bucket
    itself. Action rate and bounds are unchecked since computed statistics
    may legitimately be negative or NaN.
    """

    label: BucketLabel
    is_control: bool = Field(strict=True)
    allocation_percent: AllocationPercent = 0.0
    action_rate: float = 0.0
    lower_bound: float = 0.0
    upper_bound: float = 0.0
    user_count: UserCount = Field(default=0, strict=True)


class ExperimentView(ViewModel):
    """Card view of an experiment and its buckets.

    id, state, label and app_name are fixed at construction. Buckets are
    only installed through add_buckets() and exposed as a tuple.
    """

    id: ExperimentId = Field(frozen=True)
    state: ExperimentState = Field(frozen=True)
    # Unlike id and app_name, label may be None or empty.
    label: str | None = Field(default=None, frozen=True)
    app_name: AppName = Field(frozen=True)
    modification_time: datetime | None = None
    is_favorite: bool = Field(default=False, strict=True)
    total_number_users: TotalNumberUsers = Field(default=0, strict=True)

    _buckets: tuple[BucketView, ...] | None = PrivateAttr(default=None)

    @classmethod
    def from_experiment(cls, experiment: Experiment) -> ExperimentView:
        """Create a view from an experiment.

        Args:
            experiment: Any object exposing id, state, label,
                application_name and modification_time.

        Returns:
            ExperimentView with no buckets, not a favorite and zero users.

        Raises:
            InvalidArgumentError: If id, state or application name is invalid.
        """
        return cls(
            id=experiment.id,
            state=experiment.state,
            label=experiment.label,
            app_name=experiment.application_name,
            modification_time=experiment.modification_time,
        )

    @computed_field
    @property
    def buckets(self) -> tuple[BucketView, ...] | None:
        """Bucket views in the order they were given, or None if never set."""
        return self._buckets

    def add_buckets(self, buckets: Iterable[Bucket]) -> None:
        """Replace the bucket views with ones built from domain buckets.

        Despite the name this does not append: the previous collection is
        discarded. If any bucket fails validation nothing is installed and
        the previous collection stays in place.

        Args:
            buckets: Objects exposing label, is_control and allocation_percent.

        Raises:
            InvalidArgumentError: If a bucket's label is empty or its
                allocation percent is negative.
        """
        details = tuple(
            BucketView(
                label=bucket.label,
                is_control=bucket.is_control,
                allocation_percent=bucket.allocation_percent,
            )
            for bucket in buckets
        )
        self._buckets = details
        logger.debug(f"Installed {len(details)} bucket views for experiment {self.id}")
