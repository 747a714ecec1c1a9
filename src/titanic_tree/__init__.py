"""titanic_tree: Decision tree hypotheses for Titanic passenger survival."""

from loguru import logger

from titanic_tree.assessment import assess, empirical_risk, noise
from titanic_tree.hypothesis import EveryoneDies, FemalesSurvive, Hypothesis, TreeHypothesis
from titanic_tree.logging import PACKAGE_NAME, enable_logging
from titanic_tree.models import AssessmentResult, Example, Label, TrainingExample

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the titanic_tree module by default

__all__ = [
    "AssessmentResult",
    "EveryoneDies",
    "Example",
    "FemalesSurvive",
    "Hypothesis",
    "Label",
    "TrainingExample",
    "TreeHypothesis",
    "assess",
    "empirical_risk",
    "enable_logging",
    "noise",
]
