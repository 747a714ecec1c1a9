"""Passenger data model: labels, categorical brackets, examples and raw rows."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Labels and categorical brackets
# ---------------------------------------------------------------------------


class Label(StrEnum):
    """Binary outcome assigned to a passenger."""

    SURVIVED = "Survived"
    DIED = "Died"


class Gender(StrEnum):
    """Gender of a passenger. Always known."""

    MALE = "Male"
    FEMALE = "Female"


class AgeBracket(StrEnum):
    """Age bracket of a passenger. Missing ages fall into `ADULT`."""

    CHILD = "Child"
    ADULT = "Adult"
    ELDER = "Elder"


class TicketClass(StrEnum):
    """Ticket class of a passenger."""

    FIRST = "First"
    SECOND = "Second"
    THIRD = "Third"


class FamilySize(StrEnum):
    """Number of relatives travelling with a passenger, bracketed."""

    SINGLE = "Single"
    SMALL = "Small"
    LARGE = "Large"


class HasCabin(StrEnum):
    """Whether a passenger had a cabin code."""

    YES = "Yes"
    NO = "No"


class Port(StrEnum):
    """Embarkation port. Missing or unknown codes fall into `SOUTHHAMPTON`."""

    QUEENSTOWN = "Queenstown"
    SOUTHHAMPTON = "Southhampton"
    CHERBOURG = "Cherbourg"


# ---------------------------------------------------------------------------
# Examples
# ---------------------------------------------------------------------------


class Example(NamedTuple):
    """The categorical features of one passenger used by the decision tree.

    Attributes:
        gender (Gender): Passenger gender.
        age (AgeBracket): Age bracket.
        ticket_class (TicketClass): Ticket class.
        family_size (FamilySize): Family size bracket.
        has_cabin (HasCabin): Whether a cabin code was recorded.
        port (Port): Embarkation port.
    """

    gender: Gender
    age: AgeBracket
    ticket_class: TicketClass
    family_size: FamilySize
    has_cabin: HasCabin
    port: Port


@dataclass(frozen=True)
class TrainingExample[E]:
    """An example paired with its actual label; the unit consumed by induction.

    Attributes:
        example (E): Features extracted for one passenger.
        label (Label): Whether that passenger survived or died.
    """

    example: E
    label: Label


# ---------------------------------------------------------------------------
# Raw passenger rows
# ---------------------------------------------------------------------------

_BLANK_WHEN_MISSING: tuple[str, ...] = ("name", "ticket", "cabin", "embarked", "home_dest")


class PassengerRow(BaseModel):
    """A raw passenger row without the outcome.

    Attributes:
        passenger_id (int): Unique id assigned when the data was shuffled.
        pclass (int): Ticket class as 1, 2 or 3.
        name (str): Passenger name.
        gender (str): "male" or "female", case-insensitive.
        age (float | None): Age in years, when known.
        sibsp (int): Number of siblings and spouses aboard.
        parch (int): Number of parents and children aboard.
        ticket (str): Ticket code.
        fare (float | None): Price paid, when known.
        cabin (str): Cabin code; blank when the passenger had no cabin.
        embarked (str): Embarkation code ("Q", "C" or "S"); may be blank.
        home_dest (str): Destination.
    """

    model_config = ConfigDict(frozen=True)

    passenger_id: int = Field(ge=0, description="Unique id assigned when the data was shuffled.")
    pclass: int = Field(description="Ticket class as 1, 2 or 3.")
    name: str = Field(default="", description="Passenger name.")
    gender: str = Field(description='"male" or "female", case-insensitive.')
    age: float | None = Field(default=None, description="Age in years, when known.")
    sibsp: int = Field(default=0, ge=0, description="Number of siblings and spouses aboard.")
    parch: int = Field(default=0, ge=0, description="Number of parents and children aboard.")
    ticket: str = Field(default="", description="Ticket code.")
    fare: float | None = Field(default=None, description="Price paid, when known.")
    cabin: str = Field(default="", description="Cabin code; blank when the passenger had no cabin.")
    embarked: str = Field(default="", description='Embarkation code ("Q", "C" or "S"); may be blank.')
    home_dest: str = Field(default="", description="Destination.")

    @field_validator(*_BLANK_WHEN_MISSING, mode="before")
    @classmethod
    def _blank_missing_text(cls, value: Any) -> Any:
        """Read missing text fields as empty strings.

        Args:
            value (Any): The raw field value; `None` when the CSV cell was empty.

        Returns:
            Any: An empty string for `None`, the value unchanged otherwise.
        """
        return "" if value is None else value


class LabeledPassengerRow(PassengerRow):
    """A raw passenger row together with the recorded outcome.

    Attributes:
        survived (int): 1 if the passenger survived, 0 otherwise.
    """

    survived: int = Field(ge=0, le=1, description="1 if the passenger survived, 0 otherwise.")

    @property
    def label(self) -> Label:
        """The outcome as a `Label`."""
        return Label.SURVIVED if self.survived == 1 else Label.DIED


# ---------------------------------------------------------------------------
# Assessment output
# ---------------------------------------------------------------------------


class AssessmentResult(BaseModel):
    """Risk and noise of one hypothesis on a labelled sample.

    Attributes:
        risk (float): Empirical risk; the fraction of misclassified passengers.
        noise (float): Average minority-label fraction over groups of
            passengers sharing the same example. A lower bound on the risk
            any hypothesis using that example can reach.

    Examples:
        >>> AssessmentResult(risk=0.21, noise=0.08).risk
        0.21
    """

    model_config = ConfigDict(frozen=True)

    risk: float = Field(ge=0.0, le=1.0, description="Fraction of misclassified passengers.")
    noise: float = Field(ge=0.0, le=0.5, description="Average minority-label fraction per example group.")
