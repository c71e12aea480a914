"""
Label survey and label adaptation for the Hoax Detector

The survey runs once over the full dataset and decides which pipeline branch
is built. The adapters translate raw numeric labels into what each trainer
consumes and back.
"""

import logging
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from .exceptions import DataError, PipelineNotFittedError
from .schema import format_label

logger = logging.getLogger(__name__)


class TaskKind(str, Enum):
    BINARY = "binary"
    MULTICLASS = "multiclass"


def survey_labels(df: pd.DataFrame) -> Tuple[float, ...]:
    """
    Collect the distinct label values of the whole dataset

    Args:
        df: Loaded dataset with a numeric `label` column

    Returns:
        Distinct label values in ascending order
    """
    if df is None or df.empty:
        raise DataError("Cannot survey labels of an empty dataset")
    return tuple(float(v) for v in np.unique(df["label"].to_numpy(dtype=float)))


def select_task(label_values: Sequence[float]) -> TaskKind:
    """Exactly two distinct labels is binary; any other count is multiclass"""
    if len(label_values) == 2:
        return TaskKind.BINARY
    if len(label_values) < 2:
        logger.warning(
            "Only %d distinct label value(s) found; training a degenerate multiclass model",
            len(label_values)
        )
    return TaskKind.MULTICLASS


class BinaryLabelAdapter:
    """Maps raw labels to a boolean class indicator"""

    def __init__(self, positive_label: float):
        self.positive_label = float(positive_label)

    @classmethod
    def from_label_values(cls, label_values: Sequence[float]) -> "BinaryLabelAdapter":
        """The larger of the two surveyed values is the positive (hoax) class"""
        return cls(max(label_values))

    def transform(self, labels) -> np.ndarray:
        return np.asarray(labels, dtype=float) == self.positive_label


class LabelKeyMapper:
    """
    Maps raw labels into a contiguous key space and back

    The value-to-key table is learned at fit time from the labels it is given
    (the training split), not from the survey.
    """

    def __init__(self):
        self.encoder = LabelEncoder()
        self.is_fitted = False

    def fit(self, labels) -> "LabelKeyMapper":
        self.encoder.fit(np.asarray(labels, dtype=float))
        self.is_fitted = True
        return self

    def _check_fitted(self):
        if not self.is_fitted:
            raise PipelineNotFittedError("LabelKeyMapper must be fitted before use")

    @property
    def classes_(self) -> np.ndarray:
        self._check_fitted()
        return self.encoder.classes_

    @property
    def n_classes(self) -> int:
        return len(self.classes_)

    def known_mask(self, labels) -> np.ndarray:
        """True for labels that were present at fit time"""
        self._check_fitted()
        return np.isin(np.asarray(labels, dtype=float), self.encoder.classes_)

    def transform(self, labels) -> np.ndarray:
        self._check_fitted()
        return self.encoder.transform(np.asarray(labels, dtype=float))

    def inverse_transform(self, keys) -> np.ndarray:
        self._check_fitted()
        return self.encoder.inverse_transform(np.asarray(keys, dtype=int))

    def decode(self, keys) -> List[str]:
        """Keys back to user-facing label strings"""
        return [format_label(value) for value in self.inverse_transform(keys)]
