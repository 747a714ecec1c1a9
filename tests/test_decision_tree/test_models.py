"""Tests for the decision tree models: Feature, trees, annotated trees, Predicate and TreeRule."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from titanic_tree.decision_tree.models import (
    FEATURES,
    AnnotatedLeaf,
    AnnotatedNode,
    Feature,
    Leaf,
    Node,
    Predicate,
    TreeRule,
    depth,
    leaf_count,
    strip_annotations,
)
from titanic_tree.models import Example, Gender, Label, TrainingExample

_GENDER = FEATURES[0]
_AGE = FEATURES[1]


class TestFeature:
    """Tests for `Feature` and the declared `FEATURES` tuple."""

    def test_features_are_declared_in_tie_break_order(self) -> None:
        """FEATURES should list the six categorical features in their declared order."""
        # Act
        names = [feature.name for feature in FEATURES]

        # Assert
        assert names == ["gender", "age", "ticket_class", "family_size", "has_cabin", "port"]

    def test_feature_projects_example_attribute(
        self,
        gender_sample: list[TrainingExample[Example]],
    ) -> None:
        """Calling a feature should return the example's value for that attribute."""
        # Arrange
        female_example = gender_sample[0].example

        # Act
        value = _GENDER(female_example)

        # Assert
        with check:
            assert value == "Female"
        with check:
            assert value is Gender.FEMALE

    def test_features_compare_by_name_only(self) -> None:
        """Two features with the same name are equal even with different projections."""
        # Arrange
        first = Feature[Example]("gender", lambda example: example.gender)
        second = Feature[Example]("gender", lambda example: example.port)

        # Assert
        with check:
            assert first == second
        with check:
            assert hash(first) == hash(second)
        with check:
            assert first != _AGE


class TestTrees:
    """Tests for plain and annotated trees and the shape helpers."""

    def test_node_children_are_read_only(self) -> None:
        """A node's children mapping should reject assignment after construction."""
        # Arrange
        children = {"Female": Leaf(Label.SURVIVED)}
        node = Node(_GENDER, children)

        # Act / Assert
        with pytest.raises(TypeError):
            node.children["Male"] = Leaf(Label.DIED)  # type: ignore[index]

        # Assert - the caller's dict was copied, not wrapped
        children["Male"] = Leaf(Label.DIED)
        assert "Male" not in node.children

    def test_equal_trees_are_hashable_with_equal_hashes(self) -> None:
        """Plain and annotated trees can be hashed, and equal trees hash alike."""
        # Arrange
        first = Node(_GENDER, {"Female": Leaf(Label.SURVIVED), "Male": Leaf(Label.DIED)})
        second = Node(_GENDER, {"Female": Leaf(Label.SURVIVED), "Male": Leaf(Label.DIED)})
        annotated = AnnotatedNode(
            {Label.SURVIVED: 1, Label.DIED: 1},
            _GENDER,
            {"Female": AnnotatedLeaf({Label.SURVIVED: 1}, Label.SURVIVED)},
        )

        # Assert
        with check:
            assert hash(first) == hash(second)
        with check:
            assert len({first, second}) == 1
        with check:
            assert isinstance(hash(annotated), int)

    def test_leaf_count_and_depth_of_single_leaf(self) -> None:
        """A single leaf has one leaf and depth zero."""
        # Arrange
        tree = Leaf(Label.DIED)

        # Assert
        with check:
            assert leaf_count(tree) == 1
        with check:
            assert depth(tree) == 0

    def test_leaf_count_and_depth_of_nested_tree(self) -> None:
        """Leaf count sums the leaves; depth follows the longest path."""
        # Arrange
        tree = Node(
            _GENDER,
            {
                "Female": Node(_AGE, {"Child": Leaf(Label.SURVIVED), "Adult": Leaf(Label.DIED)}),
                "Male": Leaf(Label.DIED),
            },
        )

        # Assert
        with check:
            assert leaf_count(tree) == 3
        with check:
            assert depth(tree) == 2

    def test_strip_annotations_keeps_shape_and_labels(self) -> None:
        """Stripping annotations should yield the equivalent plain tree."""
        # Arrange
        annotated = AnnotatedNode(
            {Label.SURVIVED: 1, Label.DIED: 3},
            _GENDER,
            {
                "Female": AnnotatedLeaf({Label.SURVIVED: 1}, Label.SURVIVED),
                "Male": AnnotatedLeaf({Label.DIED: 3}, Label.DIED),
            },
        )

        # Act
        tree = strip_annotations(annotated)

        # Assert
        assert tree == Node(_GENDER, {"Female": Leaf(Label.SURVIVED), "Male": Leaf(Label.DIED)})


class TestPredicate:
    """Tests for the `Predicate` model."""

    def test_str_renders_equality(self) -> None:
        """`str()` should render the predicate as `variable == value`."""
        # Arrange
        predicate = Predicate(variable="port", value="Cherbourg")

        # Assert
        assert str(predicate) == "port == Cherbourg"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("Cherbourg", True), ("Queenstown", False)],
        ids=["matching-value", "other-value"],
    )
    def test_eval_compares_value(self, value: str, expected: bool) -> None:
        """`eval` should be true only for the predicate's own value.

        Args:
            value (str): Feature value to test.
            expected (bool): Expected result.
        """
        # Arrange
        predicate = Predicate(variable="port", value="Cherbourg")

        # Act / Assert
        assert predicate.eval(value) is expected


class TestTreeRule:
    """Tests for the `TreeRule` model."""

    def test_str_joins_predicates(self) -> None:
        """Rules with several predicates join them with AND."""
        # Arrange
        rule = TreeRule(
            predicates=[
                Predicate(variable="gender", value="Female"),
                Predicate(variable="ticket_class", value="First"),
            ],
            prediction=Label.SURVIVED,
            samples=42,
            confidence=0.9762,
        )

        # Assert
        assert str(rule) == (
            "IF gender == Female AND ticket_class == First THEN Survived (samples=42, confidence=0.9762)"
        )

    def test_str_without_predicates_is_unconditional(self) -> None:
        """A single-leaf tree's rule has no predicates and renders as TRUE."""
        # Arrange
        rule = TreeRule(predicates=[], prediction=Label.DIED, samples=10, confidence=0.6)

        # Assert
        assert str(rule) == "IF TRUE THEN Died (samples=10, confidence=0.6)"

    @pytest.mark.parametrize(
        ("samples", "confidence"),
        [(0, 0.5), (3, 1.5), (3, -0.1)],
        ids=["no-samples", "confidence-above-one", "negative-confidence"],
    )
    def test_rejects_out_of_range_values(self, samples: int, confidence: float) -> None:
        """Samples must be positive and confidence must lie in [0, 1].

        Args:
            samples (int): Sample count to validate.
            confidence (float): Confidence to validate.
        """
        # Act / Assert
        with pytest.raises(ValidationError):
            TreeRule(predicates=[], prediction=Label.DIED, samples=samples, confidence=confidence)
