"""tifcompat -- Check TIFF files for Exstream importer compatibility."""

__version__ = "1.0.0"

from tifcompat.models import FailureReason, ScanMode, TagRule, Verdict
from tifcompat.checker import RULES, check, check_tiff, scan_directories

__all__ = [
    "__version__",
    "FailureReason",
    "ScanMode",
    "TagRule",
    "Verdict",
    "RULES",
    "check",
    "check_tiff",
    "scan_directories",
]
