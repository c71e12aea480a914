"""
Data I/O module for the Hoax Detector
Handles dataset loading by column position and train/test splitting
"""

import logging
from pathlib import Path
from typing import Iterable, Tuple, Union

import pandas as pd
from sklearn.model_selection import train_test_split
from rich.table import Table

from .config import CSV_CONFIG, RANDOM_SEED, TEST_FRACTION
from .exceptions import DataError, DataFileNotFoundError
from .schema import INPUT_SCHEMA, COLUMN_NAMES, Record, format_label
from .utils import console

logger = logging.getLogger(__name__)


def records_to_frame(records: Iterable[Record]) -> pd.DataFrame:
    """Build a loader-shaped DataFrame from Record objects"""
    rows = [
        {"label": r.label, "title": r.title, "narrative": r.narrative}
        for r in records
    ]
    return pd.DataFrame(rows, columns=COLUMN_NAMES)


class DataLoader:
    """Loads the labeled news CSV into a label/title/narrative frame"""

    def __init__(self, data_path: Union[str, Path]):
        """
        Initialize data loader

        Args:
            data_path: Path to the labeled CSV file
        """
        self.data_path = Path(data_path)

    def exists(self) -> bool:
        return self.data_path.is_file()

    def load_data(self) -> pd.DataFrame:
        """
        Read the CSV and bind columns by position

        Rows whose label cannot be parsed as a number are dropped.

        Returns:
            DataFrame with columns label (float), title, narrative (str or None)
        """
        if not self.exists():
            raise DataFileNotFoundError(self.data_path)

        positions = [spec.index for spec in INPUT_SCHEMA]
        try:
            raw = pd.read_csv(
                self.data_path,
                sep=CSV_CONFIG["delimiter"],
                header=0 if CSV_CONFIG["has_header"] else None,
                encoding=CSV_CONFIG["encoding"],
                usecols=positions,
                dtype=str,
                keep_default_na=False
            )
        except pd.errors.EmptyDataError as exc:
            raise DataError(f"Dataset is empty: {self.data_path}") from exc
        except UnicodeDecodeError as exc:
            raise DataError(f"Dataset {self.data_path} is not valid {CSV_CONFIG['encoding']} text: {exc}") from exc
        except ValueError as exc:
            # usecols out of range: the file has fewer columns than the schema needs
            raise DataError(f"Dataset {self.data_path} does not match the expected column layout: {exc}") from exc

        # usecols keeps file order; positions are ascending in INPUT_SCHEMA
        # object columns keep None for missing text
        raw.columns = range(raw.shape[1])
        df = pd.DataFrame({
            spec.name: pd.Series([spec.converter(value) for value in raw[i]], dtype=object)
            for i, spec in enumerate(sorted(INPUT_SCHEMA, key=lambda s: s.index))
        }, columns=COLUMN_NAMES)

        total = len(df)
        df = df[df["label"].notna()].reset_index(drop=True)
        df["label"] = df["label"].astype(float)
        dropped = total - len(df)
        if dropped:
            logger.warning("Dropped %d of %d rows with unparseable labels", dropped, total)

        if df.empty:
            raise DataError(f"No usable rows in {self.data_path}")

        console.print(f"[green]✓[/green] Loaded {len(df):,} rows from {self.data_path}")
        return df

    def create_splits(
        self,
        df: pd.DataFrame,
        test_fraction: float = TEST_FRACTION,
        seed: int = RANDOM_SEED
    ) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Create train/test splits

        Args:
            df: Loaded DataFrame
            test_fraction: Proportion for testing
            seed: Random seed for the shuffle

        Returns:
            Tuple of (train_df, test_df)
        """
        if len(df) < 2:
            raise DataError(f"Need at least 2 rows to split, got {len(df)}")

        train_df, test_df = train_test_split(
            df,
            test_size=test_fraction,
            random_state=seed,
            shuffle=True
        )
        return train_df, test_df

    def display_split_statistics(self, train_df: pd.DataFrame, test_df: pd.DataFrame):
        """Display row and label counts for each split"""
        labels = sorted(set(train_df["label"]) | set(test_df["label"]))

        table = Table(title="Data Split Statistics", show_header=True, header_style="bold magenta")
        table.add_column("Split", style="cyan", no_wrap=True)
        table.add_column("Total", style="green")
        for label in labels:
            table.add_column(f"Label {format_label(label)}", style="yellow")

        for name, df in [("Train", train_df), ("Test", test_df)]:
            counts = df["label"].value_counts()
            table.add_row(
                name,
                str(len(df)),
                *[str(int(counts.get(label, 0))) for label in labels]
            )

        console.print(table)
