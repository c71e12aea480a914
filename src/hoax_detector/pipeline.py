"""
Pipelines for the Hoax Detector
Builds the binary (logistic regression) and multiclass (maximum entropy)
text classification pipelines over a shared featurizer
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.dummy import DummyClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from .config import FEATURIZER_CONFIG, RANDOM_SEED, TRAINER_CONFIG
from .data_io import records_to_frame
from .evaluate import (
    BinaryMetrics, MulticlassMetrics,
    compute_binary_metrics, compute_multiclass_metrics
)
from .exceptions import DataError, PipelineNotFittedError
from .features import create_text_featurizer
from .labels import BinaryLabelAdapter, LabelKeyMapper, TaskKind, select_task
from .preprocess import TextAssembler
from .schema import BinaryResult, MulticlassResult, PredictionResult, Record

logger = logging.getLogger(__name__)


def create_trainer(task: TaskKind, random_state: int = RANDOM_SEED, config: Optional[Dict[str, Any]] = None):
    """Create the classifier stage for a branch"""
    params = dict(TRAINER_CONFIG[task.value])
    if config:
        params.update(config)
    return LogisticRegression(random_state=random_state, **params)


class HoaxPipeline:
    """
    Base class for the two pipeline branches

    Stages run in order: TextAssembler -> FeatureExtractor -> classifier.
    Label adaptation wraps the stage list: labels are adapted before fit and
    predictions are decoded after.
    """

    task: TaskKind

    def __init__(
        self,
        label_values: Sequence[float],
        featurizer_config: Optional[Dict[str, Any]] = None,
        trainer_config: Optional[Dict[str, Any]] = None,
        random_state: int = RANDOM_SEED
    ):
        """
        Initialize pipeline

        Args:
            label_values: Distinct labels found by the dataset survey
            featurizer_config: Overrides for FEATURIZER_CONFIG
            trainer_config: Overrides for the branch's TRAINER_CONFIG entry
            random_state: Random seed for the trainer
        """
        self.label_values = tuple(float(v) for v in label_values)
        self.featurizer_config = dict(FEATURIZER_CONFIG, **(featurizer_config or {}))
        self.trainer_config = dict(TRAINER_CONFIG[self.task.value], **(trainer_config or {}))
        self.random_state = random_state
        self.steps = Pipeline([
            ("assemble", TextAssembler()),
            ("featurize", create_text_featurizer(self.featurizer_config)),
            ("classifier", create_trainer(self.task, random_state, self.trainer_config)),
        ])
        self.is_fitted = False

    @property
    def n_features_(self) -> int:
        self._check_fitted()
        return self.steps.named_steps["featurize"].n_features_

    def _check_fitted(self):
        if not self.is_fitted:
            raise PipelineNotFittedError("Pipeline must be fitted before prediction")

    def _adapt_labels(self, labels: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def fit(self, df: pd.DataFrame) -> "HoaxPipeline":
        """
        Fit all stages on the training split

        Args:
            df: Training rows (label, title, narrative)

        Returns:
            self
        """
        if df.empty:
            raise DataError("Cannot fit on an empty training split")
        y = self._adapt_labels(df["label"].to_numpy(dtype=float))
        self.steps.fit(df, y)
        self.is_fitted = True
        return self

    def predict(self, df: pd.DataFrame) -> List[PredictionResult]:
        raise NotImplementedError

    def predict_one(self, record: Record) -> PredictionResult:
        """Predict a single record"""
        return self.predict(records_to_frame([record]))[0]

    def evaluate(self, df: pd.DataFrame):
        raise NotImplementedError

    def _describe_trainer(self) -> Dict[str, Any]:
        classifier = self.steps.named_steps["classifier"]
        if isinstance(classifier, DummyClassifier):
            return {"estimator": "DummyClassifier", "strategy": classifier.strategy}
        return {"estimator": type(classifier).__name__, **self.trainer_config}

    def describe(self) -> Dict[str, Any]:
        """Metadata stored next to the persisted pipeline"""
        return {
            "task": self.task.value,
            "label_values": list(self.label_values),
            "featurizer": {k: list(v) if isinstance(v, tuple) else v for k, v in self.featurizer_config.items()},
            "trainer": self._describe_trainer(),
            "random_state": self.random_state
        }


class BinaryHoaxPipeline(HoaxPipeline):
    """Two-label branch: boolean label, raw score and probability"""

    task = TaskKind.BINARY

    def __init__(self, label_values: Sequence[float], **kwargs):
        if len(label_values) != 2:
            raise ValueError(f"Binary pipeline needs exactly 2 label values, got {len(label_values)}")
        super().__init__(label_values, **kwargs)
        self.label_adapter = BinaryLabelAdapter.from_label_values(self.label_values)

    def _adapt_labels(self, labels: np.ndarray) -> np.ndarray:
        return self.label_adapter.transform(labels)

    def _scores(self, df: pd.DataFrame):
        self._check_fitted()
        classifier = self.steps.named_steps["classifier"]
        positive = list(classifier.classes_).index(True)
        proba = self.steps.predict_proba(df)[:, positive]
        score = self.steps.decision_function(df)
        if positive == 0:
            score = -score
        return np.asarray(score, dtype=float), np.asarray(proba, dtype=float)

    def predict(self, df: pd.DataFrame) -> List[BinaryResult]:
        score, proba = self._scores(df)
        predicted = self.steps.predict(df).astype(bool)
        return [
            BinaryResult(predicted_label=bool(p), score=float(s), probability=float(pr))
            for p, s, pr in zip(predicted, score, proba)
        ]

    def evaluate(self, df: pd.DataFrame) -> BinaryMetrics:
        """Binary metrics on a labeled split"""
        _, proba = self._scores(df)
        y_true = self._adapt_labels(df["label"].to_numpy(dtype=float))
        y_pred = self.steps.predict(df).astype(bool)
        return compute_binary_metrics(y_true, y_pred, proba)

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["positive_label"] = self.label_adapter.positive_label
        return info


class MulticlassHoaxPipeline(HoaxPipeline):
    """Any other label count: labels mapped to keys, predictions decoded back"""

    task = TaskKind.MULTICLASS

    def __init__(self, label_values: Sequence[float], **kwargs):
        super().__init__(label_values, **kwargs)
        self.label_mapper = LabelKeyMapper()

    def _adapt_labels(self, labels: np.ndarray) -> np.ndarray:
        return self.label_mapper.transform(labels)

    def fit(self, df: pd.DataFrame) -> "MulticlassHoaxPipeline":
        if df.empty:
            raise DataError("Cannot fit on an empty training split")
        self.label_mapper.fit(df["label"].to_numpy(dtype=float))
        if self.label_mapper.n_classes < 2:
            logger.warning(
                "Training split holds a single label value (%s); using a constant classifier",
                self.label_mapper.decode([0])[0]
            )
            self.steps.set_params(classifier=DummyClassifier(strategy="most_frequent"))
        return super().fit(df)

    def predict_keys(self, df: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return np.asarray(self.steps.predict(df), dtype=int)

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """Per-class probabilities, columns ordered by label key"""
        self._check_fitted()
        return self.steps.predict_proba(df)

    def predict(self, df: pd.DataFrame) -> List[MulticlassResult]:
        labels = self.label_mapper.decode(self.predict_keys(df))
        return [MulticlassResult(predicted_label=label) for label in labels]

    def evaluate(self, df: pd.DataFrame) -> MulticlassMetrics:
        """Multiclass metrics on a labeled split"""
        self._check_fitted()
        labels = df["label"].to_numpy(dtype=float)
        known = self.label_mapper.known_mask(labels)
        if not known.all():
            logger.warning(
                "Excluding %d test rows with labels unseen during training",
                int((~known).sum())
            )
        if not known.any():
            raise DataError("No test rows carry a label seen during training")

        df = df[known]
        y_true = self.label_mapper.transform(labels[known])
        return compute_multiclass_metrics(
            y_true,
            self.predict_keys(df),
            self.predict_proba(df),
            self.label_mapper.n_classes
        )

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        if self.label_mapper.is_fitted:
            info["label_keys"] = [float(v) for v in self.label_mapper.classes_]
        return info


def build_pipeline(
    label_values: Sequence[float],
    featurizer_config: Optional[Dict[str, Any]] = None,
    trainer_config: Optional[Dict[str, Any]] = None,
    random_state: int = RANDOM_SEED
) -> HoaxPipeline:
    """
    Build the pipeline branch matching the surveyed label values

    Args:
        label_values: Distinct labels of the full dataset
        featurizer_config: Overrides for the shared featurizer configuration
        trainer_config: Overrides for the branch's trainer configuration
        random_state: Random seed for the trainer

    Returns:
        Unfitted BinaryHoaxPipeline or MulticlassHoaxPipeline
    """
    task = select_task(label_values)
    pipeline_cls = BinaryHoaxPipeline if task is TaskKind.BINARY else MulticlassHoaxPipeline
    return pipeline_cls(
        label_values,
        featurizer_config=featurizer_config,
        trainer_config=trainer_config,
        random_state=random_state
    )
