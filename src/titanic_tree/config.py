"""Settings for the shuffle and run entry points."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from titanic_tree.logging import LogFormat, LogLevel


class TitanicSettings(BaseSettings):
    """File locations, split sizes and logging options.

    Values are read from the environment (prefix `TITANIC_`), from an optional
    `.env` file, and from command-line flags when the entry points pass their
    arguments through `_cli_parse_args`.

    Attributes:
        data_dir (Path): Directory holding the passenger CSV files.
        preshuffled_file_name (str): The original, unshuffled dataset.
        training_file_name (str): Training split written by the shuffle step.
        test_file_name (str): Test split written by the shuffle step.
        test_size (int): Number of shuffled passengers held out for testing.
        training_size (int): Number of training passengers used to grow the
            tree that gets pruned; the remainder is the validation set.
        shuffle_seed (int): Seed for the passenger shuffle.
        log_level (LogLevel | None): Enables package logging at this level.
        log_format (LogFormat): Layout of enabled log lines.
    """

    model_config = SettingsConfigDict(
        env_prefix="TITANIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("data"), description="Directory holding the passenger CSV files.")
    preshuffled_file_name: str = Field(default="original.csv", description="The original, unshuffled dataset.")
    training_file_name: str = Field(default="training.csv", description="Training split file name.")
    test_file_name: str = Field(default="test.csv", description="Test split file name.")
    test_size: int = Field(default=400, ge=1, description="Passengers held out for testing.")
    training_size: int = Field(default=400, ge=1, description="Training passengers used to grow the pruned tree.")
    shuffle_seed: int = Field(default=42, description="Seed for the passenger shuffle.")
    log_level: LogLevel | None = Field(default=None, description="Enable package logging at this level.")
    log_format: LogFormat = Field(default="short", description="Layout of enabled log lines.")

    @property
    def preshuffled_path(self) -> Path:
        """Path of the original dataset."""
        return self.data_dir / self.preshuffled_file_name

    @property
    def training_path(self) -> Path:
        """Path of the training split."""
        return self.data_dir / self.training_file_name

    @property
    def test_path(self) -> Path:
        """Path of the test split."""
        return self.data_dir / self.test_file_name
