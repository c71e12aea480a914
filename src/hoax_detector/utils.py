"""
Utility functions for the Hoax Detector project
"""

import random
import logging
from typing import Iterable, Tuple

import numpy as np
from rich.console import Console
from rich.table import Table

from .config import LOGGING_CONFIG

# Initialize rich console for pretty printing
console = Console()


def set_seed(seed: int = 0):
    """
    Set random seed for reproducibility across all libraries

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    np.random.seed(seed)


def setup_logging(name: str = "hoax_detector", level: str = LOGGING_CONFIG["level"]) -> logging.Logger:
    """
    Setup logging configuration

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler
    ch = logging.StreamHandler()
    ch.setLevel(getattr(logging, level))

    # Formatter
    formatter = logging.Formatter(
        LOGGING_CONFIG["format"],
        datefmt=LOGGING_CONFIG["date_format"]
    )
    ch.setFormatter(formatter)

    logger.addHandler(ch)
    return logger


def display_metrics(rows: Iterable[Tuple[str, str]], title: str = "Model Performance"):
    """
    Display formatted metrics in a table

    Args:
        rows: (metric name, formatted score) pairs
        title: Table title
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Score", style="green")

    for metric, score in rows:
        table.add_row(metric, score)

    console.print(table)
