"""Assessment of hypotheses: empirical risk and label noise."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

from loguru import logger
from sklearn.metrics import zero_one_loss

from titanic_tree.exceptions import EmptySampleError, MissingLabelsError
from titanic_tree.models import AssessmentResult, Label, PassengerRow

if TYPE_CHECKING:
    from titanic_tree.hypothesis import Hypothesis


def empirical_risk(predictions: Mapping[int, Label], actual: Mapping[int, Label]) -> float:
    """Fraction of predicted passengers whose prediction is wrong.

    Args:
        predictions (Mapping[int, Label]): Predicted label per passenger id.
        actual (Mapping[int, Label]): Recorded label per passenger id; must
            cover every id in `predictions`.

    Returns:
        float: The empirical risk in `[0, 1]`.

    Raises:
        EmptySampleError: If `predictions` is empty.
        MissingLabelsError: If a predicted passenger has no actual label.
    """
    if not predictions:
        raise EmptySampleError("the empirical risk")
    missing_ids = [passenger_id for passenger_id in predictions if passenger_id not in actual]
    if missing_ids:
        raise MissingLabelsError(missing_ids)
    passenger_ids = list(predictions)
    misclassified = zero_one_loss(
        [actual[passenger_id] for passenger_id in passenger_ids],
        [predictions[passenger_id] for passenger_id in passenger_ids],
        normalize=False,
    )
    # Error count over size; 1 - accuracy leaves float residue in the last digit
    return float(misclassified) / len(passenger_ids)


def noise[E: Hashable](examples: Iterable[tuple[E, Label]]) -> float:
    """Estimate the irreducible error caused by conflicting labels.

    Examples are grouped by identical feature vector. Within each group the
    minority-label fraction is the share of passengers any hypothesis over
    that vector must misclassify. The groups' fractions are averaged without
    weighting by group size.

    Args:
        examples (Iterable[tuple[E, Label]]): Pairs of extracted example and
            actual label.

    Returns:
        float: The noise in `[0, 0.5]`; 0.0 when every group is label-pure.

    Raises:
        EmptySampleError: If `examples` is empty.
    """
    groups: dict[E, list[Label]] = {}
    for example, label in examples:
        groups.setdefault(example, []).append(label)
    if not groups:
        raise EmptySampleError("the noise")
    return sum(_minority_fraction(labels) for labels in groups.values()) / len(groups)


def assess[E](
    hypothesis: Hypothesis[E],
    test_rows: Sequence[PassengerRow],
    actual: Mapping[int, Label],
) -> AssessmentResult:
    """Compute the risk and noise of a hypothesis on labelled rows.

    Args:
        hypothesis (Hypothesis[E]): A trained or constant-rule hypothesis.
        test_rows (Sequence[PassengerRow]): Rows to classify.
        actual (Mapping[int, Label]): Recorded label per passenger id.

    Returns:
        AssessmentResult: The empirical risk and the noise of the
            hypothesis's examples.

    Raises:
        EmptySampleError: If `test_rows` is empty.
        MissingLabelsError: If a row has no actual label.
    """
    risk = empirical_risk(hypothesis.predict_all(test_rows), actual)
    example_noise = noise((hypothesis.extract(row), actual[row.passenger_id]) for row in test_rows)
    result = AssessmentResult(risk=risk, noise=example_noise)
    logger.info("Hypothesis assessed", hypothesis=hypothesis.name, risk=result.risk, noise=result.noise)
    return result


def _minority_fraction(labels: Sequence[Label]) -> float:
    counts = Counter(labels)
    survived = counts.get(Label.SURVIVED, 0)
    died = counts.get(Label.DIED, 0)
    return min(survived, died) / len(labels)
