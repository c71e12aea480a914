"""
Evaluation module for the Hoax Detector
Computes and reports branch-specific metrics on the test split
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Tuple

import numpy as np
from sklearn.metrics import (
    accuracy_score, precision_score, recall_score, f1_score,
    roc_auc_score, balanced_accuracy_score, log_loss
)

from .utils import console, display_metrics

logger = logging.getLogger(__name__)

# Probabilities are clipped to this range before taking logs
_LOG_LOSS_EPS = 1e-15


@dataclass(frozen=True)
class BinaryMetrics:
    accuracy: float
    auc: float
    f1: float
    precision: float
    recall: float

    def formatted(self) -> List[Tuple[str, str]]:
        return [
            ("Accuracy", f"{self.accuracy:.2%}"),
            ("AUC", f"{self.auc:.2%}"),
            ("F1Score", f"{self.f1:.2%}"),
            ("Precision", f"{self.precision:.2%}"),
            ("Recall", f"{self.recall:.2%}"),
        ]

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MulticlassMetrics:
    macro_accuracy: float
    micro_accuracy: float
    log_loss: float

    def formatted(self) -> List[Tuple[str, str]]:
        return [
            ("MacroAccuracy", f"{self.macro_accuracy:.2%}"),
            ("MicroAccuracy", f"{self.micro_accuracy:.2%}"),
            ("LogLoss", f"{self.log_loss:.4f}"),
        ]

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_binary_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray
) -> BinaryMetrics:
    """
    Compute binary classification metrics

    Args:
        y_true: True boolean labels
        y_pred: Predicted boolean labels
        y_proba: Probability of the positive class

    Returns:
        BinaryMetrics
    """
    y_true = np.asarray(y_true, dtype=bool)
    y_pred = np.asarray(y_pred, dtype=bool)

    if len(np.unique(y_true)) == 2:
        auc = roc_auc_score(y_true, y_proba)
    else:
        logger.warning("Test split holds a single class; AUC is undefined and reported as 0")
        auc = 0.0

    return BinaryMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        auc=float(auc),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
    )


def _multiclass_log_loss(y_true: np.ndarray, y_proba: np.ndarray, n_classes: int) -> float:
    if n_classes >= 2:
        return float(log_loss(y_true, y_proba, labels=list(range(n_classes))))
    # sklearn refuses a single label; the mean negative log-likelihood still applies
    picked = np.clip(y_proba[np.arange(len(y_true)), y_true], _LOG_LOSS_EPS, 1.0)
    return float(-np.mean(np.log(picked)))


def compute_multiclass_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray,
    n_classes: int
) -> MulticlassMetrics:
    """
    Compute multiclass classification metrics over label keys

    Args:
        y_true: True label keys
        y_pred: Predicted label keys
        y_proba: Per-class probabilities, shape (n_samples, n_classes)
        n_classes: Size of the key space learned at fit time

    Returns:
        MulticlassMetrics
    """
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)

    # Macro accuracy: per-class recall averaged over the classes present in y_true
    return MulticlassMetrics(
        macro_accuracy=float(balanced_accuracy_score(y_true, y_pred)),
        micro_accuracy=float(accuracy_score(y_true, y_pred)),
        log_loss=_multiclass_log_loss(y_true, np.asarray(y_proba, dtype=float), n_classes),
    )


def report_metrics(metrics, title: Optional[str] = None):
    """Print a metrics block for either branch"""
    if title is None:
        title = "Binary Metrics" if isinstance(metrics, BinaryMetrics) else "Multiclass Metrics"
    display_metrics(metrics.formatted(), title=title)
    for name, value in metrics.formatted():
        logger.info("%s: %s", name, value)
