"""Demonstrates how to enable logging while growing and pruning a decision tree.

titanic_tree logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, titanic_tree logging is automatically turned off.

Key concepts shown here:

- ``level``: ``"DEBUG"`` shows every split decision and the validation risk of
  each pruning candidate; ``"INFO"`` (the default) shows the pruning steps, the
  selected tree and assessment results.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Unmatched branches: validation passengers whose value was never seen during
  training are predicted to die, and a warning reports how many there were.
- Automatic cleanup: logging is re-disabled when the context manager exits.
"""

from titanic_tree import enable_logging
from titanic_tree.decision_tree import FEATURES, annotate_costs, build_counted_tree, extract_rules, prune
from titanic_tree.extraction import actual_labels, extract_example
from titanic_tree.models import LabeledPassengerRow, TrainingExample

training_rows = [
    LabeledPassengerRow(passenger_id=0, pclass=1, gender="female", age=38.0, cabin="C85", embarked="C", survived=1),
    LabeledPassengerRow(passenger_id=1, pclass=3, gender="female", age=26.0, survived=1),
    LabeledPassengerRow(passenger_id=2, pclass=3, gender="female", age=27.0, sibsp=1, parch=3, survived=0),
    LabeledPassengerRow(passenger_id=3, pclass=3, gender="male", age=22.0, sibsp=1, survived=0),
    LabeledPassengerRow(passenger_id=4, pclass=3, gender="male", age=35.0, survived=0),
    LabeledPassengerRow(passenger_id=5, pclass=1, gender="male", age=54.0, cabin="E46", survived=0),
    LabeledPassengerRow(passenger_id=6, pclass=3, gender="male", age=2.0, sibsp=3, parch=1, survived=0),
    LabeledPassengerRow(passenger_id=7, pclass=2, gender="male", age=4.0, parch=1, survived=1),
]
validation_rows = [
    LabeledPassengerRow(passenger_id=8, pclass=2, gender="female", age=14.0, sibsp=1, embarked="C", survived=1),
    LabeledPassengerRow(passenger_id=9, pclass=3, gender="male", age=20.0, survived=0),
    LabeledPassengerRow(passenger_id=10, pclass=3, gender="male", age=39.0, sibsp=1, parch=5, survived=0),
    LabeledPassengerRow(passenger_id=11, pclass=1, gender="male", age=65.0, parch=1, embarked="Q", survived=0),
]

# Enable DEBUG logging with the full format to follow every split and pruning candidate
with enable_logging(level="DEBUG", log_format="full"):
    examples = [TrainingExample(extract_example(row), row.label) for row in training_rows]
    counted_tree = build_counted_tree(examples, FEATURES)

    print("\nUnpruned rules:")
    for rule in extract_rules(counted_tree):
        print(f"  {rule}")

    pruned_tree = prune(annotate_costs(counted_tree), validation_rows, actual_labels(validation_rows))
    print(f"\nSelected tree: {pruned_tree}\n")

# Logging automatically disabled here
