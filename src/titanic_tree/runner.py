"""Entry points: shuffle the raw dataset, then train and assess every hypothesis."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager, nullcontext

from loguru import logger

from titanic_tree.assessment import assess
from titanic_tree.config import TitanicSettings
from titanic_tree.data import (
    read_passengers,
    read_preshuffled,
    shuffle_passengers,
    split_test_training,
    split_training_validation,
    write_passengers,
)
from titanic_tree.decision_tree import FEATURES, annotate_costs, build_counted_tree, build_tree, extract_rules, prune
from titanic_tree.extraction import actual_labels, extract_example
from titanic_tree.hypothesis import EveryoneDies, FemalesSurvive, TreeHypothesis
from titanic_tree.logging import LoggingHandle, enable_logging
from titanic_tree.models import AssessmentResult, Example, LabeledPassengerRow, TrainingExample

GREEDY_TREE_NAME: str = "greedyDecisionTree"
PRUNED_TREE_NAME: str = "prunedTree"


def run_hypotheses(
    training_rows: Sequence[LabeledPassengerRow],
    test_rows: Sequence[LabeledPassengerRow],
    training_size: int,
) -> dict[str, AssessmentResult]:
    """Train every hypothesis and assess it on the test rows.

    The greedy tree is grown on all training rows. The pruned tree is grown
    on the first `training_size` training rows and pruned against the rest.

    Args:
        training_rows (Sequence[LabeledPassengerRow]): The training split.
        test_rows (Sequence[LabeledPassengerRow]): The test split.
        training_size (int): Training rows used to grow the tree that is
            pruned; must leave at least one row for validation.

    Returns:
        dict[str, AssessmentResult]: Result per hypothesis name, in the order
            everyoneDies, femalesSurvive, greedyDecisionTree, prunedTree.

    Raises:
        EmptySampleError: If the test rows, the training rows or the
            validation rows are empty.
    """
    actual = actual_labels(test_rows)
    greedy = TreeHypothesis(build_tree(_training_examples(training_rows), FEATURES), name=GREEDY_TREE_NAME)

    growing_rows, validation_rows = split_training_validation(training_rows, training_size)
    counted_tree = build_counted_tree(_training_examples(growing_rows), FEATURES)
    pruned = TreeHypothesis(
        prune(annotate_costs(counted_tree), validation_rows, actual_labels(validation_rows)),
        name=PRUNED_TREE_NAME,
    )
    for rule in extract_rules(counted_tree):
        logger.debug("Unpruned rule", rule=str(rule))

    return {
        hypothesis.name: assess(hypothesis, test_rows, actual)
        for hypothesis in (EveryoneDies(), FemalesSurvive(), greedy, pruned)
    }


def format_report(results: Mapping[str, AssessmentResult]) -> list[str]:
    """Render the risk and noise of each hypothesis as report lines.

    Examples:
        >>> format_report({"everyoneDies": AssessmentResult(risk=0.375, noise=0.25)})
        ['The risk  for [everyoneDies] is [0.375]', 'The noise for [everyoneDies] is [0.25]']
    """
    lines: list[str] = []
    for name, result in results.items():
        lines.append(f"The risk  for [{name}] is [{result.risk}]")
        lines.append(f"The noise for [{name}] is [{result.noise}]")
    return lines


def shuffle_main(argv: Sequence[str] | None = None) -> None:
    """Shuffle the original dataset and write the test and training splits.

    Args:
        argv (Sequence[str] | None): Command-line flags; defaults to
            `sys.argv[1:]`.
    """
    settings = _load_settings(argv)
    with _logging_context(settings):
        shuffled = shuffle_passengers(read_preshuffled(settings.preshuffled_path), seed=settings.shuffle_seed)
        test, training = split_test_training(shuffled, settings.test_size)
        write_passengers(test, settings.test_path)
        write_passengers(training, settings.training_path)


def run_main(argv: Sequence[str] | None = None) -> None:
    """Assess every hypothesis on the shuffled splits and print the report.

    Args:
        argv (Sequence[str] | None): Command-line flags; defaults to
            `sys.argv[1:]`.
    """
    settings = _load_settings(argv)
    with _logging_context(settings):
        training_rows = read_passengers(settings.training_path)
        test_rows = read_passengers(settings.test_path)
        results = run_hypotheses(training_rows, test_rows, settings.training_size)
    for line in format_report(results):
        print(line)  # noqa: T201


def _load_settings(argv: Sequence[str] | None) -> TitanicSettings:
    args = list(sys.argv[1:] if argv is None else argv)
    return TitanicSettings(_cli_parse_args=args)


def _logging_context(settings: TitanicSettings) -> AbstractContextManager[LoggingHandle | None]:
    """Enable package logging for the duration of a command when a level is set."""
    if settings.log_level is None:
        return nullcontext()
    return enable_logging(level=settings.log_level, log_format=settings.log_format)


def _training_examples(rows: Sequence[LabeledPassengerRow]) -> list[TrainingExample[Example]]:
    return [TrainingExample(extract_example(row), row.label) for row in rows]
