"""Feature extraction: maps raw passenger rows onto categorical brackets.

The brackets follow a manual analysis of the passenger data. Missing values
are defaulted here so the decision tree never sees a missing feature: an
unknown age is Adult, an unknown port is Southhampton and a blank cabin is
HasCabin.NO.
"""

from __future__ import annotations

from collections.abc import Iterable

from titanic_tree.exceptions import MalformedPassengerError
from titanic_tree.models import (
    AgeBracket,
    Example,
    FamilySize,
    Gender,
    HasCabin,
    Label,
    LabeledPassengerRow,
    PassengerRow,
    Port,
    TicketClass,
)

_CHILD_AGE_LIMIT: float = 15.0  # Strictly younger passengers are children.
_ELDER_AGE_LIMIT: float = 50.0  # Strictly older passengers are elders.

_GENDERS: dict[str, Gender] = {"male": Gender.MALE, "female": Gender.FEMALE}
_TICKET_CLASSES: dict[int, TicketClass] = {1: TicketClass.FIRST, 2: TicketClass.SECOND}
_PORTS: dict[str, Port] = {"Q": Port.QUEENSTOWN, "C": Port.CHERBOURG}


def gender(row: PassengerRow) -> Gender:
    """Extract the gender of a passenger.

    Args:
        row (PassengerRow): The raw passenger row.

    Returns:
        Gender: The passenger's gender.

    Raises:
        MalformedPassengerError: If the gender is neither "male" nor "female".
    """
    try:
        return _GENDERS[row.gender.strip().lower()]
    except KeyError:
        raise MalformedPassengerError(f"unknown gender {row.gender!r}", passenger_id=row.passenger_id) from None


def age_bracket(row: PassengerRow) -> AgeBracket:
    """Extract the age bracket of a passenger, treating a missing age as adult."""
    if row.age is not None and row.age < _CHILD_AGE_LIMIT:
        return AgeBracket.CHILD
    if row.age is not None and row.age > _ELDER_AGE_LIMIT:
        return AgeBracket.ELDER
    return AgeBracket.ADULT


def ticket_class(row: PassengerRow) -> TicketClass:
    """Extract the ticket class; any class other than 1 or 2 is third class."""
    return _TICKET_CLASSES.get(row.pclass, TicketClass.THIRD)


def family_size(row: PassengerRow) -> FamilySize:
    """Bracket the number of siblings, spouses, parents and children aboard."""
    relatives = row.sibsp + row.parch
    if relatives == 0:
        return FamilySize.SINGLE
    if relatives == 1:
        return FamilySize.SMALL
    return FamilySize.LARGE


def has_cabin(row: PassengerRow) -> HasCabin:
    """Whether a non-blank cabin code was recorded."""
    return HasCabin.YES if row.cabin.strip() else HasCabin.NO


def port(row: PassengerRow) -> Port:
    """Extract the embarkation port; unknown or missing codes mean Southhampton."""
    return _PORTS.get(row.embarked.strip(), Port.SOUTHHAMPTON)


def extract_example(row: PassengerRow) -> Example:
    """Extract every categorical feature used by the decision tree.

    Args:
        row (PassengerRow): The raw passenger row.

    Returns:
        Example: The bracketed features of the passenger.

    Raises:
        MalformedPassengerError: If the row's gender cannot be read.
    """
    return Example(
        gender=gender(row),
        age=age_bracket(row),
        ticket_class=ticket_class(row),
        family_size=family_size(row),
        has_cabin=has_cabin(row),
        port=port(row),
    )


def actual_labels(rows: Iterable[LabeledPassengerRow]) -> dict[int, Label]:
    """Map each passenger id to the recorded outcome."""
    return {row.passenger_id: row.label for row in rows}
