"""Custom exceptions for titanic_tree.

All exceptions subclass ValueError, since each one reports input data the
caller handed over in an unusable shape:

- EmptySampleError: Raised when a computation needs at least one example.
- MissingLabelsError: Raised when predictions reference passengers with no
  actual label.
- MissingColumnsError: Raised when a passenger CSV lacks required columns.
- MalformedPassengerError: Raised when a passenger row cannot be parsed or
  its features cannot be extracted.

Modelled fallbacks (an unmatched branch during prediction, zero information
gain, an exhausted feature list) are never reported through exceptions.
"""

from __future__ import annotations


class EmptySampleError(ValueError):
    """Raised when an operation receives an empty sample.

    Attributes:
        operation (str): Name of the operation that required a non-empty sample.

    Examples:
        >>> err = EmptySampleError("noise")
        >>> err.operation
        'noise'
    """

    operation: str

    def __init__(self, operation: str) -> None:
        """Initialize EmptySampleError.

        Args:
            operation (str): Name of the operation that received no examples.
        """
        super().__init__(f"Cannot compute {operation} of an empty sample")
        self.operation = operation


class MissingLabelsError(ValueError):
    """Raised when predicted passengers have no actual label to compare against.

    Attributes:
        missing_ids (list[int]): Passenger ids present in the predictions but
            absent from the actual labels, sorted ascending.

    Examples:
        >>> err = MissingLabelsError(missing_ids=[7, 3])
        >>> err.missing_ids
        [3, 7]
    """

    missing_ids: list[int]

    def __init__(self, missing_ids: list[int]) -> None:
        """Initialize MissingLabelsError.

        Args:
            missing_ids (list[int]): Passenger ids without an actual label.
        """
        self.missing_ids = sorted(missing_ids)
        super().__init__(f"No actual label for passengers: {self.missing_ids}")


class MissingColumnsError(ValueError):
    """Raised when a passenger table does not have all required columns.

    Attributes:
        missing_columns (list[str]): Required column names that were not found.
        available_columns (list[str]): Column names present in the table.

    Examples:
        >>> err = MissingColumnsError(
        ...     missing_columns=["sex"],
        ...     available_columns=["pclass", "survived"],
        ... )
        >>> err.missing_columns
        ['sex']
    """

    missing_columns: list[str]
    available_columns: list[str]

    def __init__(
        self,
        missing_columns: list[str],
        available_columns: list[str],
    ) -> None:
        """Initialize MissingColumnsError.

        Args:
            missing_columns (list[str]): Required columns absent from the table.
            available_columns (list[str]): Columns present in the table.
        """
        super().__init__(f"Columns not found in passenger data: {sorted(missing_columns)}")
        self.missing_columns = missing_columns
        self.available_columns = available_columns


class MalformedPassengerError(ValueError):
    """Raised when a passenger row is malformed.

    Attributes:
        passenger_id (int | None): Id of the offending passenger, when known.
        reason (str): Human-readable explanation of what is wrong.
    """

    passenger_id: int | None
    reason: str

    def __init__(self, reason: str, *, passenger_id: int | None = None) -> None:
        """Initialize MalformedPassengerError.

        Args:
            reason (str): Description of the problem with the row.
            passenger_id (int | None): Id of the offending passenger, if known.
        """
        prefix = f"Passenger {passenger_id}" if passenger_id is not None else "Passenger row"
        super().__init__(f"{prefix} is malformed: {reason}")
        self.passenger_id = passenger_id
        self.reason = reason

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including the passenger id and reason.
        """
        return f"{self.__class__.__name__}(passenger_id={self.passenger_id!r}, reason={self.reason!r})"
