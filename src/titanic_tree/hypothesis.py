"""Hypotheses: mappings from passengers to predicted labels.

A hypothesis extracts its own kind of example from a raw passenger row and
predicts a label from that example. The examples differ per hypothesis:
`EveryoneDies` uses nothing, `FemalesSurvive` uses only the gender and
`TreeHypothesis` uses the full categorical `Example`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from titanic_tree.decision_tree.models import Tree
from titanic_tree.decision_tree.prediction import predict, predict_all
from titanic_tree.extraction import extract_example, gender
from titanic_tree.models import Example, Gender, Label, LabeledPassengerRow, PassengerRow, TrainingExample


class Hypothesis[E](ABC):
    """A classifier over passenger rows.

    Subclasses define how an example is extracted from a row and how a label
    is predicted for it.
    """

    name: str

    @abstractmethod
    def extract(self, row: PassengerRow) -> E:
        """Extract the features this hypothesis needs from a raw row.

        Args:
            row (PassengerRow): The raw passenger row.

        Returns:
            E: The example used for prediction.
        """

    @abstractmethod
    def predict(self, example: E) -> Label:
        """Predict a label for an example.

        Args:
            example (E): An example produced by `extract`.

        Returns:
            Label: The predicted outcome.
        """

    def extract_training_example(self, row: LabeledPassengerRow) -> TrainingExample[E]:
        """Pair the example extracted from `row` with its recorded outcome."""
        return TrainingExample(self.extract(row), row.label)

    def predict_all(self, rows: Iterable[PassengerRow]) -> dict[int, Label]:
        """Predict a label for every row, keyed by passenger id.

        Args:
            rows (Iterable[PassengerRow]): Raw passenger rows.

        Returns:
            dict[int, Label]: Predicted label per passenger id.
        """
        return {row.passenger_id: self.predict(self.extract(row)) for row in rows}


class EveryoneDies(Hypothesis[None]):
    """Predicts that every passenger dies.

    Most passengers died, so this beats a random guess.
    """

    name = "everyoneDies"

    def extract(self, row: PassengerRow) -> None:
        """No feature of the passenger is used."""
        return None

    def predict(self, example: None) -> Label:
        """Always `Label.DIED`."""
        return Label.DIED


class FemalesSurvive(Hypothesis[Gender]):
    """Predicts that female passengers survive and male passengers die."""

    name = "femalesSurvive"

    def extract(self, row: PassengerRow) -> Gender:
        """Only the gender is used."""
        return gender(row)

    def predict(self, example: Gender) -> Label:
        """`Label.SURVIVED` for females, `Label.DIED` for males."""
        return Label.SURVIVED if example is Gender.FEMALE else Label.DIED


class TreeHypothesis(Hypothesis[Example]):
    """A learned decision tree.

    Attributes:
        tree (Tree): The tree used for prediction.
        name (str): Name reported alongside the tree's assessment.
    """

    def __init__(self, tree: Tree, name: str = "decisionTree") -> None:
        """Initialize the hypothesis.

        Args:
            tree (Tree): A plain (unannotated) decision tree.
            name (str): Name reported alongside the tree's assessment.
        """
        self.tree = tree
        self.name = name

    def extract(self, row: PassengerRow) -> Example:
        """Extract the full categorical example."""
        return extract_example(row)

    def predict(self, example: Example) -> Label:
        """Walk the tree for `example`."""
        return predict(self.tree, example)

    def predict_all(self, rows: Iterable[PassengerRow]) -> dict[int, Label]:
        """Predict every row, logging how many fell back on an unmatched branch."""
        return predict_all(self.tree, rows)
