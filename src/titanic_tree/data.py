"""Passenger CSV ingestion: shuffling, splitting and loading raw rows.

The original dataset is shuffled once with a fixed seed, each passenger gets
an id in shuffled order, and the result is split into a test file and a
training file. Columns only known after the sinking (`boat`, `body`) are
dropped at that point so they can never leak into a hypothesis.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

import polars as pl
from loguru import logger
from pydantic import ValidationError

from titanic_tree.exceptions import MalformedPassengerError, MissingColumnsError
from titanic_tree.models import LabeledPassengerRow

# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

PRESHUFFLED_SCHEMA: Final[dict[str, type[pl.DataType]]] = {
    "pclass": pl.Int64,
    "survived": pl.Int64,
    "name": pl.String,
    "sex": pl.String,
    "age": pl.Float64,
    "sibsp": pl.Int64,
    "parch": pl.Int64,
    "ticket": pl.String,
    "fare": pl.Float64,
    "cabin": pl.String,
    "embarked": pl.String,
    "boat": pl.String,
    "body": pl.String,
    "home.dest": pl.String,
}

PASSENGER_SCHEMA: Final[dict[str, type[pl.DataType]]] = {
    "passenger_id": pl.Int64,
    "pclass": pl.Int64,
    "name": pl.String,
    "gender": pl.String,
    "age": pl.Float64,
    "sibsp": pl.Int64,
    "parch": pl.Int64,
    "ticket": pl.String,
    "fare": pl.Float64,
    "cabin": pl.String,
    "embarked": pl.String,
    "home_dest": pl.String,
    "survived": pl.Int64,
}

_RENAMED_COLUMNS: Final[dict[str, str]] = {"sex": "gender", "home.dest": "home_dest"}
_POST_DISASTER_COLUMNS: Final[tuple[str, ...]] = ("boat", "body")

# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def read_preshuffled(path: Path) -> pl.DataFrame:
    """Read the original, unshuffled passenger dataset.

    Args:
        path (Path): CSV file with a header row.

    Returns:
        pl.DataFrame: The dataset cast to `PRESHUFFLED_SCHEMA`.

    Raises:
        MissingColumnsError: If a required column is absent.
        MalformedPassengerError: If a value cannot be cast to its column type.
    """
    df = _read_typed_csv(path, PRESHUFFLED_SCHEMA)
    logger.info("Preshuffled passengers loaded", path=str(path), rows=len(df))
    return df


def shuffle_passengers(df: pl.DataFrame, seed: int) -> pl.DataFrame:
    """Shuffle the original dataset and assign passenger ids.

    Args:
        df (pl.DataFrame): Output of `read_preshuffled`.
        seed (int): Seed for the shuffle.

    Returns:
        pl.DataFrame: Rows in shuffled order with a `passenger_id` column
            numbered from 0, laid out as `PASSENGER_SCHEMA`.
    """
    shuffled = df.sample(fraction=1.0, shuffle=True, seed=seed)
    return (
        shuffled.drop(_POST_DISASTER_COLUMNS)
        .rename(_RENAMED_COLUMNS)
        .with_row_index("passenger_id")
        .select(pl.col(name).cast(dtype) for name, dtype in PASSENGER_SCHEMA.items())
    )


def split_test_training(df: pl.DataFrame, test_size: int) -> tuple[pl.DataFrame, pl.DataFrame]:
    """Split shuffled passengers into test and training frames.

    Args:
        df (pl.DataFrame): Output of `shuffle_passengers`.
        test_size (int): Number of leading rows held out for testing.

    Returns:
        tuple[pl.DataFrame, pl.DataFrame]: `(test, training)`.
    """
    return df.head(test_size), df.slice(test_size)


def write_passengers(df: pl.DataFrame, path: Path) -> None:
    """Write shuffled passengers to CSV, creating the parent directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(path)
    logger.info("Passengers written", path=str(path), rows=len(df))


def read_passengers(path: Path) -> list[LabeledPassengerRow]:
    """Read a shuffled split back as validated passenger rows.

    Args:
        path (Path): A CSV written by `write_passengers`.

    Returns:
        list[LabeledPassengerRow]: One row per passenger, in file order.

    Raises:
        MissingColumnsError: If a required column is absent.
        MalformedPassengerError: If a row fails type casting or validation.
    """
    df = _read_typed_csv(path, PASSENGER_SCHEMA)
    rows = [_validate_row(record) for record in df.iter_rows(named=True)]
    logger.info("Passengers loaded", path=str(path), rows=len(rows))
    return rows


def split_training_validation(
    rows: Sequence[LabeledPassengerRow],
    training_size: int,
) -> tuple[list[LabeledPassengerRow], list[LabeledPassengerRow]]:
    """Split training rows into a tree-growing part and a validation part.

    Args:
        rows (Sequence[LabeledPassengerRow]): All training rows.
        training_size (int): Number of leading rows used to grow the tree.

    Returns:
        tuple[list[LabeledPassengerRow], list[LabeledPassengerRow]]:
            `(training, validation)`.
    """
    return list(rows[:training_size]), list(rows[training_size:])


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _read_typed_csv(path: Path, schema: dict[str, type[pl.DataType]]) -> pl.DataFrame:
    """Read a CSV as text, check its columns, then cast them to `schema`.

    Args:
        path (Path): CSV file with a header row.
        schema (dict[str, type[pl.DataType]]): Required columns and their types.

    Returns:
        pl.DataFrame: The required columns, in schema order, cast to their types.

    Raises:
        MissingColumnsError: If a column of `schema` is absent.
        MalformedPassengerError: If a value cannot be cast.
    """
    raw = pl.read_csv(path, infer_schema=False)
    missing_columns = [name for name in schema if name not in raw.columns]
    if missing_columns:
        raise MissingColumnsError(missing_columns=missing_columns, available_columns=raw.columns)
    try:
        return raw.select(pl.col(name).str.strip_chars().cast(dtype) for name, dtype in schema.items())
    except pl.exceptions.InvalidOperationError as exc:
        raise MalformedPassengerError(str(exc)) from exc


def _validate_row(record: dict[str, object]) -> LabeledPassengerRow:
    """Validate one CSV record as a `LabeledPassengerRow`.

    Args:
        record (dict[str, object]): Column name to value for one row.

    Returns:
        LabeledPassengerRow: The validated row.

    Raises:
        MalformedPassengerError: If pydantic rejects the record.
    """
    try:
        return LabeledPassengerRow.model_validate(record)
    except ValidationError as exc:
        passenger_id = record.get("passenger_id")
        raise MalformedPassengerError(
            str(exc),
            passenger_id=passenger_id if isinstance(passenger_id, int) else None,
        ) from exc
