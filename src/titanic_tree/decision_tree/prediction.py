"""Tree traversal: classify examples with a decision tree."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from loguru import logger

from titanic_tree.decision_tree.models import Leaf, Tree
from titanic_tree.extraction import extract_example
from titanic_tree.models import Example, Label, PassengerRow

# Examples whose value was never seen at a node during training are predicted to die.
UNMATCHED_BRANCH_LABEL: Final[Label] = Label.DIED


def predict(tree: Tree, example: Example) -> Label:
    """Classify one example.

    Walks from the root, following the child for the example's value of each
    node's feature. When a node has no child for that value, the prediction
    is `UNMATCHED_BRANCH_LABEL` regardless of the node's majority label.

    Args:
        tree (Tree): The decision tree.
        example (Example): The example to classify.

    Returns:
        Label: The predicted label.
    """
    label = _walk(tree, example)
    return UNMATCHED_BRANCH_LABEL if label is None else label


def predict_all(tree: Tree, rows: Iterable[PassengerRow]) -> dict[int, Label]:
    """Classify every passenger row.

    Args:
        tree (Tree): The decision tree.
        rows (Iterable[PassengerRow]): Raw passenger rows.

    Returns:
        dict[int, Label]: Predicted label per passenger id.
    """
    predictions: dict[int, Label] = {}
    unmatched_count = 0
    for row in rows:
        label = _walk(tree, extract_example(row))
        if label is None:
            unmatched_count += 1
            label = UNMATCHED_BRANCH_LABEL
        predictions[row.passenger_id] = label
    if unmatched_count:
        logger.warning(
            "Passengers reached an unmatched branch",
            count=unmatched_count,
            total=len(predictions),
            fallback=str(UNMATCHED_BRANCH_LABEL),
        )
    return predictions


def _walk(tree: Tree, example: Example) -> Label | None:
    """Return the label of the leaf reached by `example`, or `None` if a branch is missing."""
    node = tree
    while not isinstance(node, Leaf):
        child = node.children.get(node.feature(example))
        if child is None:
            return None
        node = child
    return node.label
