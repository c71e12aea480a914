"""
Configuration file for the Hoax Detector project
Contains all run-level constants, file defaults, and hyperparameters
"""

from typing import Dict, Any

# Default file locations (relative to the working directory)
DEFAULT_DATA_PATH = "Data_latih.csv"
DEFAULT_MODEL_PATH = "hoax_model.zip"

# Random seed for reproducibility
RANDOM_SEED = 0

# Data split ratio
TEST_FRACTION = 0.2

# Title and narrative are joined with this separator
TEXT_SEPARATOR = "\n"

# CSV layout: ID,label,tanggal,judul,narasi,nama file gambar
CSV_CONFIG = {
    "delimiter": ",",
    "has_header": True,
    "encoding": "utf-8",
    "label_column": 1,
    "title_column": 3,
    "narrative_column": 4
}

# Shared text featurizer configuration (both branches)
FEATURIZER_CONFIG = {
    "word_ngram_range": (1, 2),
    "char_ngram_range": (3, 3),
    "lowercase": True,
    "sublinear_tf": True,
    "norm": "l2",
    "min_df": 1,
    "max_df": 1.0,
    "max_features": 10000
}

# Trainer configurations
TRAINER_CONFIG = {
    "binary": {
        "solver": "liblinear",
        "max_iter": 1000,
        "C": 1.0
    },
    "multiclass": {
        "solver": "lbfgs",
        "max_iter": 1000,
        "C": 1.0
    }
}

# Illustrative record used for the post-training sanity check
SAMPLE_RECORD = {
    "title": "Contoh judul",
    "narrative": "Isi berita yang mengandung klaim tidak berdasar."
}

# Display names for the binary branch
BINARY_LABEL_NAMES = {
    True: "Hoax",
    False: "Bukan Hoax"
}

# Persisted archive layout
MODEL_FORMAT_VERSION = 1
MODEL_ARCHIVE_MEMBERS = {
    "schema": "schema.json",
    "model": "model.joblib"
}

# Logging configuration
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "date_format": "%Y-%m-%d %H:%M:%S"
}


def get_config() -> Dict[str, Any]:
    """Return complete configuration dictionary"""
    return {
        "paths": {
            "data": DEFAULT_DATA_PATH,
            "model": DEFAULT_MODEL_PATH
        },
        "seed": RANDOM_SEED,
        "test_fraction": TEST_FRACTION,
        "text_separator": TEXT_SEPARATOR,
        "csv": dict(CSV_CONFIG),
        "featurizer": dict(FEATURIZER_CONFIG),
        "trainer": {name: dict(params) for name, params in TRAINER_CONFIG.items()},
        "model_format_version": MODEL_FORMAT_VERSION
    }
