from .loader import RecordLoader
from .logger import ReportLogger
from .normalizer import Normalizer
from .rule import FieldRule

__all__ = [
    "FieldRule",
    "Normalizer",
    "RecordLoader",
    "ReportLogger",
]
