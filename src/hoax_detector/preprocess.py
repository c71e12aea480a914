"""
Text preprocessing module for the Hoax Detector
Assembles the single text field classified for each news item
"""

from typing import Any, List

import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from .config import TEXT_SEPARATOR


def _as_text(value: Any) -> str:
    """Missing values (None, NaN) become the empty string"""
    if value is None or value is pd.NA:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    return str(value)


def assemble_text(record) -> str:
    """
    Join title and narrative of a record

    Args:
        record: Any object with `title` and `narrative` attributes
            (Record, DataFrame itertuples row, ...)

    Returns:
        title + separator + narrative, missing sides treated as empty
    """
    title = _as_text(getattr(record, "title", None))
    narrative = _as_text(getattr(record, "narrative", None))
    return title + TEXT_SEPARATOR + narrative


class TextAssembler(TransformerMixin, BaseEstimator):
    """Pipeline stage turning a label/title/narrative frame into texts"""

    def fit(self, X: pd.DataFrame, y=None):
        return self

    def transform(self, X: pd.DataFrame) -> List[str]:
        frame = X.reindex(columns=["title", "narrative"])
        return [assemble_text(row) for row in frame.itertuples(index=False)]
