"""
Record schema for the Hoax Detector

Declares the input row layout as an ordered list of typed column extractors
and the two prediction shapes produced by the binary and multiclass pipelines.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .config import CSV_CONFIG, BINARY_LABEL_NAMES


def to_label(value: Any) -> Optional[float]:
    """Parse a raw label cell into a float, or None if it is not a finite number"""
    if value is None:
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def to_text(value: Any) -> Optional[str]:
    """Parse a raw text cell, mapping empty and NaN cells to None"""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value)
    return text if text != "" else None


@dataclass(frozen=True)
class ColumnSpec:
    """One typed field extracted from a fixed CSV position"""
    name: str
    index: int
    converter: Callable[[Any], Any]
    dtype: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "index": self.index, "dtype": self.dtype}


INPUT_SCHEMA: Tuple[ColumnSpec, ...] = (
    ColumnSpec("label", CSV_CONFIG["label_column"], to_label, "float"),
    ColumnSpec("title", CSV_CONFIG["title_column"], to_text, "text"),
    ColumnSpec("narrative", CSV_CONFIG["narrative_column"], to_text, "text"),
)

COLUMN_NAMES: List[str] = [spec.name for spec in INPUT_SCHEMA]


def schema_to_dict() -> List[Dict[str, Any]]:
    """Serializable description of INPUT_SCHEMA"""
    return [spec.to_dict() for spec in INPUT_SCHEMA]


@dataclass(frozen=True)
class Record:
    """
    One news item

    `label` is always present for rows coming from the loader; records built
    by hand for inference may leave it unset.
    """
    label: Optional[float] = None
    title: Optional[str] = None
    narrative: Optional[str] = None


def format_label(value: float) -> str:
    """Render a numeric label code without losing digits (2.0 -> '2', 0.5 -> '0.5')"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class BinaryResult:
    """Prediction of the binary pipeline"""
    predicted_label: bool
    score: float
    probability: float
    kind: str = field(default="binary", init=False)

    def describe(self) -> str:
        name = BINARY_LABEL_NAMES[self.predicted_label]
        return f"{name} (Prob: {self.probability:.2%})"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MulticlassResult:
    """Prediction of the multiclass pipeline"""
    predicted_label: str
    kind: str = field(default="multiclass", init=False)

    def describe(self) -> str:
        return self.predicted_label

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


PredictionResult = Union[BinaryResult, MulticlassResult]
