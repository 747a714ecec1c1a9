"""Decision tree sub-package: induction, prediction, pruning and rule extraction."""

from __future__ import annotations

from titanic_tree.decision_tree.impurity import entropy, gain, majority_label, resubstitution_risk
from titanic_tree.decision_tree.induction import build_counted_tree, build_tree, most_common_label
from titanic_tree.decision_tree.models import (
    FEATURES,
    AnnotatedLeaf,
    AnnotatedNode,
    AnnotatedTree,
    Feature,
    LabelCounts,
    Leaf,
    Node,
    Predicate,
    Tree,
    TreeRule,
    depth,
    leaf_count,
    strip_annotations,
)
from titanic_tree.decision_tree.prediction import UNMATCHED_BRANCH_LABEL, predict, predict_all
from titanic_tree.decision_tree.pruning import (
    CostInfo,
    annotate_costs,
    collapse_min_cost,
    min_cost,
    prune,
    pruning_sequence,
    select_best_tree,
)
from titanic_tree.decision_tree.rules import extract_rules

__all__ = [
    "FEATURES",
    "UNMATCHED_BRANCH_LABEL",
    "AnnotatedLeaf",
    "AnnotatedNode",
    "AnnotatedTree",
    "CostInfo",
    "Feature",
    "LabelCounts",
    "Leaf",
    "Node",
    "Predicate",
    "Tree",
    "TreeRule",
    "annotate_costs",
    "build_counted_tree",
    "build_tree",
    "collapse_min_cost",
    "depth",
    "entropy",
    "extract_rules",
    "gain",
    "leaf_count",
    "majority_label",
    "min_cost",
    "most_common_label",
    "predict",
    "predict_all",
    "prune",
    "pruning_sequence",
    "resubstitution_risk",
    "select_best_tree",
    "strip_annotations",
]
