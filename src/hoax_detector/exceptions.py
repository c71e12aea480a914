"""
Exception types raised by the Hoax Detector
"""


class HoaxDetectorError(Exception):
    """Base class for all hoax detector errors"""


class DataFileNotFoundError(HoaxDetectorError, FileNotFoundError):
    """Input dataset does not exist"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Data file not found: {path}")


class DataError(HoaxDetectorError, ValueError):
    """Dataset is empty, unparseable, or too small for the run"""


class PipelineNotFittedError(HoaxDetectorError, RuntimeError):
    """Pipeline used for prediction before it was fitted"""


class PersistenceError(HoaxDetectorError):
    """Model archive could not be written or read back"""
