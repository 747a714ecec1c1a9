"""Tree values, features and rule models for the decision tree module.

Trees are immutable: every transformation (annotation, pruning, stripping
annotations) builds a new tree and leaves its input untouched. Children are
keyed only by the feature values observed in the training partition that
reached the node, so a tree is generally not exhaustive over a feature's
domain.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from operator import attrgetter
from types import MappingProxyType

from pydantic import BaseModel, Field

from titanic_tree.models import Example, Label

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type LabelCounts = Mapping[Label, int]

type Tree = Leaf | Node

type AnnotatedTree[A] = AnnotatedLeaf[A] | AnnotatedNode[A]

# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Feature[E]:
    """A named categorical projection of an example.

    Features are compared and hashed by name only; induction treats them as
    opaque, interchangeable projections.

    Attributes:
        name (str): Name used in logs and exported rules.
        projection (Callable[[E], str]): Maps an example to its value for this
            feature.

    Examples:
        >>> from titanic_tree.models import Example
        >>> gender = Feature[Example]("gender", lambda example: example.gender)
        >>> gender.name
        'gender'
    """

    name: str
    projection: Callable[[E], str] = field(repr=False, compare=False)

    def __call__(self, example: E) -> str:
        """Project `example` onto this feature.

        Args:
            example (E): The example to project.

        Returns:
            str: The example's value for this feature.
        """
        return self.projection(example)


def _attribute_feature(name: str) -> Feature[Example]:
    return Feature(name, attrgetter(name))


# Declared order doubles as the tie-break order when two features share the best gain.
FEATURES: tuple[Feature[Example], ...] = (
    _attribute_feature("gender"),
    _attribute_feature("age"),
    _attribute_feature("ticket_class"),
    _attribute_feature("family_size"),
    _attribute_feature("has_cabin"),
    _attribute_feature("port"),
)

# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Leaf:
    """Terminal prediction."""

    label: Label


@dataclass(frozen=True)
class Node:
    """Internal split on one feature.

    Hashed by feature only; children take part in equality but not in the hash.

    Attributes:
        feature (Feature): The feature this node branches on.
        children (Mapping[str, Tree]): Subtree per observed feature value.
    """

    feature: Feature
    children: Mapping[str, Tree] = field(hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))


@dataclass(frozen=True)
class AnnotatedLeaf[A]:
    """A leaf tagged with an annotation.

    Attributes:
        annotation (A): Label counts or cost information for this leaf.
        label (Label): The leaf's prediction.
    """

    annotation: A = field(hash=False)
    label: Label


@dataclass(frozen=True)
class AnnotatedNode[A]:
    """An internal node tagged with an annotation.

    Annotations and children are excluded from the hash.

    Attributes:
        annotation (A): Label counts or cost information for this node.
        feature (Feature): The feature this node branches on.
        children (Mapping[str, AnnotatedTree[A]]): Subtree per observed value.
    """

    annotation: A = field(hash=False)
    feature: Feature
    children: Mapping[str, AnnotatedTree[A]] = field(hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))


def leaf_count(tree: Tree | AnnotatedTree) -> int:
    """Count the leaves of a plain or annotated tree.

    Args:
        tree (Tree | AnnotatedTree): The tree to measure.

    Returns:
        int: Number of leaves; 1 for a single leaf.
    """
    if isinstance(tree, (Leaf, AnnotatedLeaf)):
        return 1
    return sum(leaf_count(child) for child in tree.children.values())


def depth(tree: Tree | AnnotatedTree) -> int:
    """Length of the longest root-to-leaf path; 0 for a single leaf."""
    if isinstance(tree, (Leaf, AnnotatedLeaf)):
        return 0
    return 1 + max(depth(child) for child in tree.children.values())


def strip_annotations(tree: AnnotatedTree) -> Tree:
    """Drop the annotations from a tree, keeping its shape.

    Args:
        tree (AnnotatedTree): A count- or cost-annotated tree.

    Returns:
        Tree: The same tree without annotations.
    """
    if isinstance(tree, AnnotatedLeaf):
        return Leaf(tree.label)
    return Node(
        tree.feature,
        {value: strip_annotations(child) for value, child in tree.children.items()},
    )


# ---------------------------------------------------------------------------
# Rule models
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single equality condition on one feature.

    Attributes:
        variable (str): Feature name the condition applies to, e.g. `"gender"`.
        value (str): The branch value, e.g. `"Female"`.

    Examples:
        >>> p = Predicate(variable="gender", value="Female")
        >>> str(p)
        'gender == Female'
        >>> p.eval("Male")
        False
    """

    variable: str = Field(description="Feature name the condition applies to, e.g. 'gender'.")
    value: str = Field(description="Branch value the feature must equal, e.g. 'Female'.")

    def __str__(self) -> str:
        """Return the predicate as `"<variable> == <value>"`."""
        return f"{self.variable} == {self.value}"

    def eval(self, x: str) -> bool:
        """Evaluate this predicate against a feature value.

        Args:
            x (str): The feature value to test.

        Returns:
            bool: `True` if `x` equals the predicate's value.
        """
        return x == self.value


class TreeRule(BaseModel):
    """A decision rule read off one leaf of an annotated tree.

    Attributes:
        predicates (list[Predicate]): Conditions along the path from the root
            to this leaf. Empty for a single-leaf tree.
        prediction (Label): The leaf's label.
        samples (int): Number of training examples that reached the leaf.
        confidence (float): Fraction of those examples carrying the predicted
            label.

    Examples:
        >>> rule = TreeRule(
        ...     predicates=[Predicate(variable="gender", value="Male")],
        ...     prediction=Label.DIED,
        ...     samples=310,
        ...     confidence=0.81,
        ... )
        >>> str(rule)
        'IF gender == Male THEN Died (samples=310, confidence=0.81)'
    """

    predicates: list[Predicate] = Field(
        description="Predicates along the path from root to this leaf. Empty for a single-leaf tree.",
    )
    prediction: Label = Field(description="Label predicted for examples reaching this leaf.")
    samples: int = Field(ge=1, description="Number of training examples that reached this leaf.")
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Fraction of examples at this leaf carrying the predicted label.",
    )

    def __str__(self) -> str:
        """Return the rule as an `IF ... THEN ...` line."""
        condition = " AND ".join(str(predicate) for predicate in self.predicates) or "TRUE"
        return f"IF {condition} THEN {self.prediction} (samples={self.samples}, confidence={self.confidence})"
