"""
Model persistence for the Hoax Detector

A saved model is a zip archive holding the fitted pipeline (joblib) and a
JSON schema describing the rows it was trained against.
"""

import io
import json
import os
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import joblib
import sklearn

from .config import MODEL_ARCHIVE_MEMBERS, MODEL_FORMAT_VERSION, TEXT_SEPARATOR, get_config
from .exceptions import PersistenceError
from .pipeline import HoaxPipeline
from .schema import schema_to_dict
from .utils import console


def build_model_schema(pipeline: HoaxPipeline) -> Dict[str, Any]:
    """Schema document stored next to the pipeline"""
    return {
        "format_version": MODEL_FORMAT_VERSION,
        "columns": schema_to_dict(),
        "text_separator": TEXT_SEPARATOR,
        "n_features": pipeline.n_features_,
        "sklearn_version": sklearn.__version__,
        "created_at": datetime.now().isoformat(),
        "config": get_config(),
        **pipeline.describe()
    }


def save_model(pipeline: HoaxPipeline, path: Union[str, Path]) -> Path:
    """
    Save a fitted pipeline with its schema

    Args:
        pipeline: Fitted pipeline
        path: Destination archive

    Returns:
        Path the archive was written to
    """
    path = Path(path)
    schema = build_model_schema(pipeline)

    buffer = io.BytesIO()
    joblib.dump(pipeline, buffer)

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(MODEL_ARCHIVE_MEMBERS["schema"], json.dumps(schema, indent=2))
            archive.writestr(MODEL_ARCHIVE_MEMBERS["model"], buffer.getvalue())
        os.replace(tmp_path, path)
    except OSError as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        raise PersistenceError(f"Could not save model to {path}: {exc}") from exc

    console.print(f"[green]✓[/green] Model saved to {path}")
    return path


def load_model(path: Union[str, Path]) -> Tuple[HoaxPipeline, Dict[str, Any]]:
    """
    Load a pipeline saved by save_model

    Args:
        path: Archive path

    Returns:
        Tuple of (pipeline, schema)
    """
    path = Path(path)
    if not path.is_file():
        raise PersistenceError(f"Model file not found: {path}")

    try:
        with zipfile.ZipFile(path, "r") as archive:
            schema = json.loads(archive.read(MODEL_ARCHIVE_MEMBERS["schema"]).decode("utf-8"))
            model_bytes = archive.read(MODEL_ARCHIVE_MEMBERS["model"])
    except (zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise PersistenceError(f"Invalid model archive {path}: {exc}") from exc

    version = schema.get("format_version")
    if version != MODEL_FORMAT_VERSION:
        raise PersistenceError(
            f"Unsupported model format version {version} (expected {MODEL_FORMAT_VERSION})"
        )

    pipeline = joblib.load(io.BytesIO(model_bytes))
    if not isinstance(pipeline, HoaxPipeline):
        raise PersistenceError(f"Archive {path} does not contain a hoax detector pipeline")

    return pipeline, schema
