"""Impurity measures: entropy, information gain and label histograms."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import numpy as np

from titanic_tree.decision_tree.models import Feature, LabelCounts
from titanic_tree.exceptions import EmptySampleError
from titanic_tree.models import Label, TrainingExample


def label_counts(labels: Iterable[Label]) -> dict[Label, int]:
    """Count labels, keeping the order in which each label was first seen.

    Args:
        labels (Iterable[Label]): The labels to count.

    Returns:
        dict[Label, int]: Count per label present in `labels`.
    """
    return dict(Counter(labels))


def majority_label(counts: LabelCounts) -> Label:
    """Return the label with the largest count.

    Ties go to the label that comes first in `counts`, which for histograms
    built by `label_counts` is the label encountered first.

    Args:
        counts (LabelCounts): Label histogram.

    Returns:
        Label: The most frequent label.

    Raises:
        EmptySampleError: If `counts` is empty.
    """
    if not counts:
        raise EmptySampleError("the majority label")
    return max(counts, key=counts.__getitem__)


def resubstitution_risk(counts: LabelCounts) -> int:
    """Count the examples a single majority-label leaf would misclassify.

    Args:
        counts (LabelCounts): Label histogram of the examples at a node.

    Returns:
        int: Total count minus the count of the majority label; 0 when empty.

    Examples:
        >>> resubstitution_risk({Label.SURVIVED: 3, Label.DIED: 3})
        3
    """
    return sum(counts.values()) - max(counts.values(), default=0)


def entropy(labels: Iterable[Label]) -> float:
    """Shannon entropy, in bits, of the empirical label distribution.

    The entropy is 0.0 for an empty or single-class sample and 1.0 for a
    perfectly balanced binary sample.

    Args:
        labels (Iterable[Label]): The labels of a sample.

    Returns:
        float: The entropy of the sample's labels.
    """
    counts = np.fromiter(Counter(labels).values(), dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return 0.0
    probabilities = counts / total
    probabilities = probabilities[probabilities > 0]
    return float(np.sum(probabilities * np.log2(1.0 / probabilities)))


def partition[E](
    sample: Iterable[TrainingExample[E]],
    feature: Feature[E],
) -> dict[str, list[TrainingExample[E]]]:
    """Group a sample by each example's value for `feature`.

    Args:
        sample (Iterable[TrainingExample[E]]): The examples to group.
        feature (Feature[E]): The feature to group by.

    Returns:
        dict[str, list[TrainingExample[E]]]: Examples per observed value, in
            order of first appearance.
    """
    groups: dict[str, list[TrainingExample[E]]] = {}
    for training_example in sample:
        groups.setdefault(feature(training_example.example), []).append(training_example)
    return groups


def gain[E](sample: Sequence[TrainingExample[E]], feature: Feature[E]) -> float:
    """Information gain from splitting `sample` on `feature`.

    The parent entropy minus the size-weighted entropy of each partition.
    Floating point residue below zero is clamped, so the result is never
    negative.

    Args:
        sample (Sequence[TrainingExample[E]]): Labelled examples at a node.
        feature (Feature[E]): Candidate split feature.

    Returns:
        float: The decrease in entropy; 0.0 for an empty sample or a feature
            that does not separate the labels.
    """
    if not sample:
        return 0.0
    parent_entropy = entropy(training_example.label for training_example in sample)
    sample_size = len(sample)
    children_entropy = sum(
        len(subset) / sample_size * entropy(training_example.label for training_example in subset)
        for subset in partition(sample, feature).values()
    )
    return max(parent_entropy - children_entropy, 0.0)
