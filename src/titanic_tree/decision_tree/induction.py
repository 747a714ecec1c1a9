"""Greedy, entropy-based induction of categorical decision trees.

At each node the candidate feature with the largest information gain is
chosen and removed from the candidates of that node's subtrees. Siblings
choose independently from the same remaining candidates. Induction stops with
a majority-label leaf when the candidates are exhausted, the sample is
label-homogeneous, or no candidate has positive gain.

Tie-breaks are deterministic: among features with equal best gain the first
in candidate order wins, and among equally frequent labels the label seen
first in the sample wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

from loguru import logger

from titanic_tree.decision_tree.impurity import gain, label_counts, majority_label, partition
from titanic_tree.decision_tree.models import (
    AnnotatedLeaf,
    AnnotatedNode,
    AnnotatedTree,
    Feature,
    LabelCounts,
    Leaf,
    Node,
    Tree,
)
from titanic_tree.exceptions import EmptySampleError
from titanic_tree.models import Label, TrainingExample

_ZERO_GAIN_TOLERANCE: float = 1e-12  # Gains at or below this are treated as no gain at all.


class _Split(NamedTuple):
    """The split chosen for a node.

    Attributes:
        feature (Feature): Feature with the largest gain.
        partitions (dict[str, list[TrainingExample]]): Examples per
            observed value of `feature`.
        remaining (list[Feature]): Candidates left for the subtrees.
    """

    feature: Feature
    partitions: dict[str, list[TrainingExample]]
    remaining: list[Feature]


def most_common_label[E](examples: Sequence[TrainingExample[E]]) -> Label:
    """Return the most frequent label in `examples`.

    Args:
        examples (Sequence[TrainingExample[E]]): A non-empty sample.

    Returns:
        Label: The majority label; ties go to the label seen first.

    Raises:
        EmptySampleError: If `examples` is empty.
    """
    if not examples:
        raise EmptySampleError("the most common label")
    return majority_label(label_counts(training_example.label for training_example in examples))


def build_tree[E](examples: Sequence[TrainingExample[E]], features: Sequence[Feature[E]]) -> Tree:
    """Grow an unpruned decision tree.

    Args:
        examples (Sequence[TrainingExample[E]]): Labelled training sample.
        features (Sequence[Feature[E]]): Candidate features in tie-break order.

    Returns:
        Tree: The greedy tree.

    Raises:
        EmptySampleError: If `examples` is empty.
    """
    decision = _decide(examples, features)
    if isinstance(decision, _Split):
        return Node(
            decision.feature,
            {value: build_tree(subset, decision.remaining) for value, subset in decision.partitions.items()},
        )
    return Leaf(decision)


def build_counted_tree[E](
    examples: Sequence[TrainingExample[E]],
    features: Sequence[Feature[E]],
) -> AnnotatedTree[LabelCounts]:
    """Grow an unpruned tree tagging every node with its label histogram.

    The shape is identical to `build_tree` on the same inputs; each node and
    leaf additionally carries the label counts of the training examples that
    reached it.

    Args:
        examples (Sequence[TrainingExample[E]]): Labelled training sample.
        features (Sequence[Feature[E]]): Candidate features in tie-break order.

    Returns:
        AnnotatedTree[LabelCounts]: The greedy tree tagged with label counts.

    Raises:
        EmptySampleError: If `examples` is empty.
    """
    counts = label_counts(training_example.label for training_example in examples)
    decision = _decide(examples, features)
    if isinstance(decision, _Split):
        return AnnotatedNode(
            counts,
            decision.feature,
            {value: build_counted_tree(subset, decision.remaining) for value, subset in decision.partitions.items()},
        )
    return AnnotatedLeaf(counts, decision)


def _decide[E](
    examples: Sequence[TrainingExample[E]],
    features: Sequence[Feature[E]],
) -> Label | _Split:
    """Decide whether a node becomes a leaf (its label) or a split.

    Args:
        examples (Sequence[TrainingExample[E]]): Examples reaching the node.
        features (Sequence[Feature[E]]): Candidate features for the node.

    Returns:
        Label | _Split: The leaf label, or the chosen split.
    """
    if not features:
        return most_common_label(examples)

    if len({training_example.label for training_example in examples}) <= 1:
        return most_common_label(examples)

    best_feature, best_gain = features[0], gain(examples, features[0])
    for feature in features[1:]:
        feature_gain = gain(examples, feature)
        if feature_gain > best_gain:
            best_feature, best_gain = feature, feature_gain

    if best_gain <= _ZERO_GAIN_TOLERANCE:
        label = most_common_label(examples)
        logger.debug("No informative split", sample_size=len(examples), label=str(label))
        return label

    logger.debug("Split selected", feature=best_feature.name, gain=round(best_gain, 6), sample_size=len(examples))
    return _Split(
        feature=best_feature,
        partitions=partition(examples, best_feature),
        remaining=[feature for feature in features if feature != best_feature],
    )
