"""Shared fixtures: passenger row factories, example factories and a log sink."""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Generator
from typing import Any

import loguru
import pytest
from loguru import logger

from titanic_tree.logging import PACKAGE_NAME, LoggingHandle
from titanic_tree.models import (
    AgeBracket,
    Example,
    FamilySize,
    Gender,
    HasCabin,
    Label,
    LabeledPassengerRow,
    Port,
    TicketClass,
    TrainingExample,
)

type PassengerFactory = Callable[..., LabeledPassengerRow]
type TrainingExampleFactory = Callable[..., TrainingExample[Example]]


@pytest.fixture
def make_passenger() -> PassengerFactory:
    """Build labelled passenger rows for a third-class adult travelling alone.

    Returns:
        PassengerFactory: Callable taking a passenger id plus keyword overrides
            for any `LabeledPassengerRow` field.
    """

    def _make(passenger_id: int, **overrides: Any) -> LabeledPassengerRow:
        fields: dict[str, Any] = {
            "passenger_id": passenger_id,
            "pclass": 3,
            "name": f"Passenger {passenger_id}",
            "gender": "male",
            "age": 30.0,
            "survived": 0,
        }
        fields.update(overrides)
        return LabeledPassengerRow.model_validate(fields)

    return _make


@pytest.fixture
def make_training_example() -> TrainingExampleFactory:
    """Build training examples whose features default to the most common values.

    Returns:
        TrainingExampleFactory: Callable taking a label plus keyword overrides
            for any `Example` field.
    """

    def _make(label: Label, **overrides: Any) -> TrainingExample[Example]:
        fields: dict[str, Any] = {
            "gender": Gender.MALE,
            "age": AgeBracket.ADULT,
            "ticket_class": TicketClass.THIRD,
            "family_size": FamilySize.SINGLE,
            "has_cabin": HasCabin.NO,
            "port": Port.SOUTHHAMPTON,
        }
        fields.update(overrides)
        return TrainingExample(Example(**fields), label)

    return _make


@pytest.fixture
def gender_sample(make_training_example: TrainingExampleFactory) -> list[TrainingExample[Example]]:
    """One surviving female followed by three male passengers who died.

    Returns:
        list[TrainingExample[Example]]: Sample separated perfectly by gender.
    """
    return [
        make_training_example(Label.SURVIVED, gender=Gender.FEMALE),
        make_training_example(Label.DIED),
        make_training_example(Label.DIED),
        make_training_example(Label.DIED),
    ]


@contextlib.contextmanager
def capturing_sink(*, enable_package: bool = True) -> Generator[list[loguru.Record]]:
    """Add a loguru sink and yield the list of records it captures.

    Args:
        enable_package (bool): When True, enables the titanic_tree logger for
            the duration of the block. Pass False to observe the logger state
            left by the code under test.

    Yields:
        Generator[list[loguru.Record]]: Records in arrival order.
    """
    captured_records: list[loguru.Record] = []

    def _sink(message: loguru.Message) -> None:
        captured_records.append(message.record)

    handler_id = logger.add(_sink, level="TRACE")
    if enable_package:
        logger.enable(PACKAGE_NAME)
    try:
        yield captured_records
    finally:
        if enable_package:
            logger.disable(PACKAGE_NAME)
        logger.remove(handler_id)


@pytest.fixture
def log_records() -> Generator[list[loguru.Record]]:
    """Capture every titanic_tree log record emitted during a test.

    Yields:
        Generator[list[loguru.Record]]: Records in arrival order.
    """
    with capturing_sink() as captured_records:
        yield captured_records


@pytest.fixture(autouse=True)
def restore_active_ids() -> Generator[None]:
    """Save and restore LoggingHandle._active_ids around each test.

    LoggingHandle._active_ids is process-wide, so a test that fails before
    disabling its handle would leak handler IDs into later tests.

    Yields:
        None: Nothing; used only for setup/teardown side effects.
    """
    saved_ids: set[int] = set(LoggingHandle._active_ids)

    yield

    added_ids = LoggingHandle._active_ids - saved_ids
    for handler_id in added_ids:
        with contextlib.suppress(ValueError):
            logger.remove(handler_id)
    # Mutate in place; the ClassVar set is shared.
    LoggingHandle._active_ids.clear()
    LoggingHandle._active_ids.update(saved_ids)
    logger.disable(PACKAGE_NAME)
