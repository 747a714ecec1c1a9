"""Cost-complexity (weakest-link) pruning and validation-based tree selection.

Pruning takes three steps:

1. Tag the tree with the information needed to compute the cost of
   collapsing each node (`annotate_costs`).
2. Find the minimum cost in the tree (`min_cost`).
3. Replace every node with that cost by a majority-label leaf
   (`collapse_min_cost`).

Repeating this until only a leaf remains gives a nested sequence of trees
(`pruning_sequence`). The final tree is the one with the lowest risk on a
validation set (`select_best_tree`).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from loguru import logger

from titanic_tree.assessment import empirical_risk
from titanic_tree.decision_tree.impurity import majority_label, resubstitution_risk
from titanic_tree.decision_tree.models import (
    AnnotatedLeaf,
    AnnotatedNode,
    AnnotatedTree,
    LabelCounts,
    Tree,
    leaf_count,
    strip_annotations,
)
from titanic_tree.decision_tree.prediction import predict_all
from titanic_tree.models import Label, PassengerRow

# ---------------------------------------------------------------------------
# Cost information
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CostInfo:
    """The information needed to compute the cost of collapsing a subtree.

    Attributes:
        leaf_count (int): Number of leaves in the subtree.
        risk (int): Sum of the resubstitution risks of the subtree's leaves.
        label_counts (LabelCounts): Label histogram of the training examples
            that reached the subtree's root.
    """

    leaf_count: int
    risk: int
    label_counts: LabelCounts

    @property
    def cost(self) -> float:
        """Increase in risk per leaf removed by collapsing the subtree.

        Infinite for a single leaf, which cannot be collapsed any further. A
        small cost means many leaves go for little extra risk, which makes the
        subtree a good candidate for pruning.
        """
        if self.leaf_count == 1:
            return math.inf
        return (resubstitution_risk(self.label_counts) - self.risk) / (self.leaf_count - 1)


def leaf_cost_info(counts: LabelCounts) -> CostInfo:
    """Cost information of a leaf with the given label histogram."""
    return CostInfo(leaf_count=1, risk=resubstitution_risk(counts), label_counts=counts)


def parent_cost_info(counts: LabelCounts, children: Iterable[CostInfo]) -> CostInfo:
    """Cost information of a node from its own histogram and its children's info.

    Args:
        counts (LabelCounts): Label histogram at the node itself.
        children (Iterable[CostInfo]): Cost information of each child.

    Returns:
        CostInfo: Leaves and risk summed over the children, with the node's
            own label counts.
    """
    child_infos = list(children)
    return CostInfo(
        leaf_count=sum(child.leaf_count for child in child_infos),
        risk=sum(child.risk for child in child_infos),
        label_counts=counts,
    )


def annotate_costs(tree: AnnotatedTree[LabelCounts]) -> AnnotatedTree[CostInfo]:
    """Tag a count-annotated tree with cost information, bottom-up.

    Args:
        tree (AnnotatedTree[LabelCounts]): Tree from `build_counted_tree`.

    Returns:
        AnnotatedTree[CostInfo]: A new tree of the same shape tagged with
            `CostInfo`.
    """
    if isinstance(tree, AnnotatedLeaf):
        return AnnotatedLeaf(leaf_cost_info(tree.annotation), tree.label)
    children = {value: annotate_costs(child) for value, child in tree.children.items()}
    return AnnotatedNode(
        parent_cost_info(tree.annotation, (child.annotation for child in children.values())),
        tree.feature,
        children,
    )


def cost(tree: AnnotatedTree[CostInfo]) -> float:
    """Cost of collapsing the root of `tree`; infinite for a leaf."""
    if isinstance(tree, AnnotatedLeaf):
        return math.inf
    return tree.annotation.cost


# ---------------------------------------------------------------------------
# Weakest-link pruning
# ---------------------------------------------------------------------------


def min_cost(tree: AnnotatedTree[CostInfo]) -> float:
    """Find the minimum cost over all internal nodes of `tree`.

    Args:
        tree (AnnotatedTree[CostInfo]): A cost-annotated tree.

    Returns:
        float: The smallest node cost; infinite when `tree` is a leaf.
    """
    if isinstance(tree, AnnotatedLeaf):
        return math.inf
    return min(cost(tree), *(min_cost(child) for child in tree.children.values()))


def collapse_min_cost(tree: AnnotatedTree[CostInfo], value: float) -> AnnotatedTree[CostInfo]:
    """Collapse every node whose cost is at most `value` into a leaf.

    Collapsed nodes become a leaf predicting their majority label. Nodes that
    survive keep their feature and get their cost information re-derived from
    their new children.

    Args:
        tree (AnnotatedTree[CostInfo]): A cost-annotated tree.
        value (float): The minimum cost of `tree`.

    Returns:
        AnnotatedTree[CostInfo]: The collapsed tree.
    """
    if isinstance(tree, AnnotatedLeaf):
        return tree
    counts = tree.annotation.label_counts
    if tree.annotation.cost <= value:
        return AnnotatedLeaf(leaf_cost_info(counts), majority_label(counts))
    children = {branch: collapse_min_cost(child, value) for branch, child in tree.children.items()}
    return AnnotatedNode(
        parent_cost_info(counts, (child.annotation for child in children.values())),
        tree.feature,
        children,
    )


def pruning_sequence(tree: AnnotatedTree[CostInfo]) -> list[AnnotatedTree[CostInfo]]:
    """Generate the nested sequence of weakest-link pruned trees.

    Args:
        tree (AnnotatedTree[CostInfo]): The full cost-annotated tree.

    Returns:
        list[AnnotatedTree[CostInfo]]: `tree` followed by each successive
            collapse, ending with a single leaf. Leaf counts strictly decrease.
    """
    sequence = [tree]
    current = tree
    while isinstance(current, AnnotatedNode):
        weakest_cost = min_cost(current)
        current = collapse_min_cost(current, weakest_cost)
        sequence.append(current)
        logger.info("Pruned weakest links", cost=weakest_cost, leaf_count=current.annotation.leaf_count)
    return sequence


# ---------------------------------------------------------------------------
# Model selection
# ---------------------------------------------------------------------------


def select_best_tree(
    sequence: Sequence[AnnotatedTree[CostInfo]],
    validation_rows: Sequence[PassengerRow],
    actual: Mapping[int, Label],
) -> Tree:
    """Pick the tree in a pruning sequence with the lowest validation risk.

    The full tree (the first element) is evaluated first, then the pruned
    trees from the most pruned back to the least pruned. A candidate replaces
    the current best only when its risk is strictly lower, so on ties the
    earlier-evaluated candidate is kept.

    Args:
        sequence (Sequence[AnnotatedTree[CostInfo]]): Output of
            `pruning_sequence`; must not be empty.
        validation_rows (Sequence[PassengerRow]): Rows held out from training.
        actual (Mapping[int, Label]): Recorded label per validation passenger.

    Returns:
        Tree: The selected tree, without annotations.

    Raises:
        EmptySampleError: If `validation_rows` is empty.
        MissingLabelsError: If a validation row has no actual label.
    """
    full_tree, *pruned_trees = sequence
    best_tree: Tree | None = None
    best_risk = math.inf
    for candidate in [full_tree, *reversed(pruned_trees)]:
        tree = strip_annotations(candidate)
        risk = empirical_risk(predict_all(tree, validation_rows), actual)
        logger.debug("Candidate evaluated", leaf_count=leaf_count(tree), risk=risk)
        if best_tree is None or risk < best_risk:
            best_tree, best_risk = tree, risk
    logger.info("Selected pruned tree", leaf_count=leaf_count(best_tree), risk=best_risk)
    return best_tree


def prune(
    tree: AnnotatedTree[CostInfo],
    validation_rows: Sequence[PassengerRow],
    actual: Mapping[int, Label],
) -> Tree:
    """Prune a tree with cost-complexity pruning and validation selection.

    Args:
        tree (AnnotatedTree[CostInfo]): The full cost-annotated tree.
        validation_rows (Sequence[PassengerRow]): Rows held out from training.
        actual (Mapping[int, Label]): Recorded label per validation passenger.

    Returns:
        Tree: The tree in the pruning sequence with the lowest validation risk.
    """
    return select_best_tree(pruning_sequence(tree), validation_rows, actual)
