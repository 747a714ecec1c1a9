"""Tests for tree traversal: `predict` and `predict_all`."""

from __future__ import annotations

from collections.abc import Callable

import loguru
from pytest_check import check

from titanic_tree.decision_tree.models import FEATURES, Leaf, Node
from titanic_tree.decision_tree.prediction import UNMATCHED_BRANCH_LABEL, predict, predict_all
from titanic_tree.extraction import extract_example
from titanic_tree.models import Label, LabeledPassengerRow

S = Label.SURVIVED
D = Label.DIED
_GENDER, _AGE = FEATURES[0], FEATURES[1]

_GENDER_TREE = Node(_GENDER, {"Female": Leaf(S), "Male": Leaf(D)})


class TestPredict:
    """Tests for `predict`."""

    def test_follows_matching_branches(self, make_passenger: Callable[..., LabeledPassengerRow]) -> None:
        """Each example should land in the leaf of its own branch.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
        """
        # Arrange
        female = extract_example(make_passenger(0, gender="female"))
        male = extract_example(make_passenger(1, gender="male"))

        # Act / Assert
        with check:
            assert predict(_GENDER_TREE, female) == S
        with check:
            assert predict(_GENDER_TREE, male) == D

    def test_leaf_predicts_its_label_for_any_example(
        self,
        make_passenger: Callable[..., LabeledPassengerRow],
    ) -> None:
        """A single-leaf tree predicts its label for every example.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
        """
        # Arrange
        example = extract_example(make_passenger(0, gender="female", age=4.0))

        # Act / Assert
        assert predict(Leaf(S), example) == S

    def test_unmatched_branch_predicts_died(self, make_passenger: Callable[..., LabeledPassengerRow]) -> None:
        """A value never seen during training falls back to Died, even under a surviving majority.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
        """
        # Arrange - only children were seen at the age node, and they all survived
        tree = Node(_GENDER, {"Female": Node(_AGE, {"Child": Leaf(S)}), "Male": Leaf(D)})
        adult_female = extract_example(make_passenger(0, gender="female", age=35.0))

        # Act
        label = predict(tree, adult_female)

        # Assert
        with check:
            assert label == D
        with check:
            assert UNMATCHED_BRANCH_LABEL == D


class TestPredictAll:
    """Tests for `predict_all`."""

    def test_predictions_keyed_by_passenger_id(self, make_passenger: Callable[..., LabeledPassengerRow]) -> None:
        """Every row should get a prediction under its passenger id.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
        """
        # Arrange
        rows = [make_passenger(7, gender="female"), make_passenger(3), make_passenger(11, gender="FEMALE")]

        # Act
        predictions = predict_all(_GENDER_TREE, rows)

        # Assert
        assert predictions == {7: S, 3: D, 11: S}

    def test_unmatched_branches_log_a_warning(
        self,
        make_passenger: Callable[..., LabeledPassengerRow],
        log_records: list[loguru.Record],
    ) -> None:
        """Rows reaching a missing branch are counted in a single warning.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
            log_records (list[loguru.Record]): Captured titanic_tree log records.
        """
        # Arrange
        tree = Node(_GENDER, {"Female": Leaf(S)})
        rows = [make_passenger(0), make_passenger(1), make_passenger(2, gender="female")]

        # Act
        predictions = predict_all(tree, rows)

        # Assert
        with check:
            assert predictions == {0: D, 1: D, 2: S}
        warnings = [record for record in log_records if record["level"].name == "WARNING"]
        assert len(warnings) == 1
        with check:
            assert warnings[0]["extra"]["count"] == 2
        with check:
            assert warnings[0]["extra"]["total"] == 3

    def test_matched_rows_log_nothing(
        self,
        make_passenger: Callable[..., LabeledPassengerRow],
        log_records: list[loguru.Record],
    ) -> None:
        """No warning is emitted when every row follows an existing branch.

        Args:
            make_passenger (Callable[..., LabeledPassengerRow]): Factory for passenger rows.
            log_records (list[loguru.Record]): Captured titanic_tree log records.
        """
        # Act
        predict_all(_GENDER_TREE, [make_passenger(0), make_passenger(1, gender="female")])

        # Assert
        assert not [record for record in log_records if record["level"].name == "WARNING"]
