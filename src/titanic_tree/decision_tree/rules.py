"""Rule extraction: one human-readable rule per leaf of an annotated tree."""

from __future__ import annotations

from titanic_tree.decision_tree.models import AnnotatedLeaf, AnnotatedTree, LabelCounts, Predicate, TreeRule
from titanic_tree.decision_tree.pruning import CostInfo

_CONFIDENCE_DECIMAL_PLACES: int = 4


def extract_rules(tree: AnnotatedTree[LabelCounts] | AnnotatedTree[CostInfo]) -> list[TreeRule]:
    """Extract the rules of a count- or cost-annotated tree.

    Leaves are visited depth-first, children in branch order, so the rules
    come out in the same order as the tree's leaves.

    Args:
        tree (AnnotatedTree[LabelCounts] | AnnotatedTree[CostInfo]): A tree
            from `build_counted_tree`, `annotate_costs` or the pruning
            sequence.

    Returns:
        list[TreeRule]: One rule per leaf.
    """
    rules: list[TreeRule] = []
    _walk_tree(tree, path_predicates=[], rules=rules)
    return rules


def _walk_tree(
    tree: AnnotatedTree[LabelCounts] | AnnotatedTree[CostInfo],
    *,
    path_predicates: list[Predicate],
    rules: list[TreeRule],
) -> None:
    """Recursively walk a tree and accumulate leaf rules.

    Args:
        tree (AnnotatedTree[LabelCounts] | AnnotatedTree[CostInfo]): The
            current subtree.
        path_predicates (list[Predicate]): Predicates from the root to `tree`.
        rules (list[TreeRule]): Accumulator; leaf rules are appended in place.
    """
    if isinstance(tree, AnnotatedLeaf):
        rules.append(_build_leaf_rule(tree, path_predicates))
        return
    for value, child in tree.children.items():
        predicate = Predicate(variable=tree.feature.name, value=str(value))
        _walk_tree(child, path_predicates=[*path_predicates, predicate], rules=rules)


def _build_leaf_rule(
    leaf: AnnotatedLeaf[LabelCounts] | AnnotatedLeaf[CostInfo],
    path_predicates: list[Predicate],
) -> TreeRule:
    """Construct the rule for one leaf from the label counts stored on it."""
    counts = leaf.annotation.label_counts if isinstance(leaf.annotation, CostInfo) else leaf.annotation
    samples = sum(counts.values())
    confidence = counts.get(leaf.label, 0) / samples
    return TreeRule(
        predicates=path_predicates,
        prediction=leaf.label,
        samples=samples,
        confidence=round(confidence, _CONFIDENCE_DECIMAL_PLACES),
    )
