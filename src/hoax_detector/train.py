"""
Training script for the Hoax Detector
Surveys labels, builds the matching pipeline, trains, evaluates, saves the
model and runs one sample prediction
"""

import argparse
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from rich.markup import escape

from .config import (
    DEFAULT_DATA_PATH,
    DEFAULT_MODEL_PATH,
    RANDOM_SEED,
    SAMPLE_RECORD,
    TEST_FRACTION,
    get_config
)
from .data_io import DataLoader
from .exceptions import DataFileNotFoundError
from .labels import TaskKind, survey_labels
from .persistence import save_model
from .pipeline import HoaxPipeline, build_pipeline
from .evaluate import report_metrics
from .schema import Record, PredictionResult, format_label
from .utils import console, set_seed, setup_logging

logger = logging.getLogger(__name__)


@dataclass
class TrainingReport:
    """Outcome of one training run"""
    task: TaskKind
    label_values: Tuple[float, ...]
    train_size: int
    test_size: int
    metrics: Any
    model_path: Path
    sample_prediction: Optional[PredictionResult] = None
    sample_error: Optional[str] = None
    elapsed_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task.value,
            "label_values": list(self.label_values),
            "train_size": self.train_size,
            "test_size": self.test_size,
            "metrics": self.metrics.to_dict(),
            "model_path": str(self.model_path),
            "sample_prediction": self.sample_prediction.to_dict() if self.sample_prediction else None,
            "sample_error": self.sample_error,
            "elapsed_seconds": self.elapsed_seconds
        }


class HoaxModelTrainer:
    """Runs the whole training workflow once"""

    def __init__(
        self,
        data_path: Union[str, Path] = DEFAULT_DATA_PATH,
        model_path: Union[str, Path] = DEFAULT_MODEL_PATH,
        seed: int = RANDOM_SEED,
        test_fraction: float = TEST_FRACTION
    ):
        """
        Initialize trainer

        Args:
            data_path: Labeled CSV file
            model_path: Where the trained model archive is written
            seed: Random seed for the split and the trainer
            test_fraction: Share of rows held out for evaluation
        """
        self.data_path = Path(data_path)
        self.model_path = Path(model_path)
        self.seed = seed
        self.test_fraction = test_fraction
        self.loader = DataLoader(self.data_path)

    def sample_record(self) -> Record:
        return Record(title=SAMPLE_RECORD["title"], narrative=SAMPLE_RECORD["narrative"])

    def run_sample_prediction(self, pipeline: HoaxPipeline) -> PredictionResult:
        result = pipeline.predict_one(self.sample_record())
        console.print(f"Sample prediction: {result.describe()}")
        return result

    def train(self) -> TrainingReport:
        """Main training pipeline"""
        if not self.loader.exists():
            raise DataFileNotFoundError(self.data_path)

        start_time = time.time()

        console.print(f"\n{'='*60}")
        console.print("[bold cyan]Hoax Detector Training[/bold cyan]")
        console.print(f"Data: {self.data_path}")
        console.print(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        console.print(f"{'='*60}\n")

        set_seed(self.seed)
        logger.info("Run configuration: %s", get_config())

        # Load and survey the full dataset
        df = self.loader.load_data()
        label_values = survey_labels(df)
        console.print(f"Detected label values: {', '.join(format_label(v) for v in label_values)}")

        # Build the matching branch
        pipeline = build_pipeline(label_values, random_state=self.seed)
        if pipeline.task is TaskKind.BINARY:
            console.print("Using binary classification pipeline (LogisticRegression).")
        else:
            console.print("Using multiclass classification pipeline (multinomial LogisticRegression).")

        # Split
        train_df, test_df = self.loader.create_splits(df, self.test_fraction, self.seed)
        self.loader.display_split_statistics(train_df, test_df)

        console.print("[cyan]Training...[/cyan]")
        pipeline.fit(train_df)
        console.print(f"  Feature dimensions: {pipeline.n_features_:,}")

        console.print("[cyan]Evaluating...[/cyan]")
        metrics = pipeline.evaluate(test_df)
        report_metrics(metrics, title="Test Set Performance")

        save_model(pipeline, self.model_path)

        report = TrainingReport(
            task=pipeline.task,
            label_values=label_values,
            train_size=len(train_df),
            test_size=len(test_df),
            metrics=metrics,
            model_path=self.model_path
        )

        # The model is already on disk; a failing sample does not undo that
        try:
            report.sample_prediction = self.run_sample_prediction(pipeline)
        except Exception as exc:
            logger.exception("Sample prediction failed")
            console.print(f"[red]Sample prediction failed: {escape(str(exc))}[/red]")
            report.sample_error = str(exc)

        report.elapsed_seconds = time.time() - start_time
        logger.info("Training report: %s", report.to_dict())
        console.print(f"\n{'='*60}")
        console.print("[bold green]✨ Training Complete![/bold green]")
        console.print(f"Total time: {report.elapsed_seconds:.2f} seconds")
        console.print(f"{'='*60}\n")

        return report


def run(
    data_path: Union[str, Path] = DEFAULT_DATA_PATH,
    model_path: Union[str, Path] = DEFAULT_MODEL_PATH
) -> Optional[TrainingReport]:
    """
    Train once; a missing data file is reported and nothing else happens

    Returns:
        TrainingReport, or None when the data file does not exist
    """
    trainer = HoaxModelTrainer(data_path=data_path, model_path=model_path)
    try:
        return trainer.train()
    except DataFileNotFoundError as exc:
        console.print(escape(str(exc)))
        return None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train a hoax/news category classifier")

    parser.add_argument('data_path', nargs='?', default=DEFAULT_DATA_PATH,
                        help=f'Labeled CSV file (default: {DEFAULT_DATA_PATH})')

    parser.add_argument('model_path', nargs='?', default=DEFAULT_MODEL_PATH,
                        help=f'Output model archive (default: {DEFAULT_MODEL_PATH})')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    setup_logging()
    run(args.data_path, args.model_path)


if __name__ == "__main__":
    main()
