"""Data models for tifcompat rules and check results."""

import enum
from dataclasses import dataclass
from typing import List, Tuple


class FailureReason(str, enum.Enum):
    """Why a file cannot be handed to the Exstream importer."""
    NOT_TIFF = "not a TIFF file"
    LAYERS = "file contains embedded layers (not flattened)"
    PREDICTOR = "file uses a compression predictor"

    def __str__(self) -> str:
        return self.value


class ScanMode(enum.Enum):
    """How far the checker scans once a disqualifying tag is found."""
    FAIL_FAST = "fail-fast"      # stop at the first match
    COLLECT_ALL = "collect-all"  # finish the current directory, then stop


@dataclass(frozen=True)
class TagRule:
    """A tag whose presence makes a file incompatible."""
    tag_id: int
    tag_name: str
    reason: FailureReason

    def matches(self, code: int, name: str) -> bool:
        """Both the numeric ID and the canonical name must match."""
        return code == self.tag_id and name == self.tag_name


@dataclass(frozen=True)
class Verdict:
    """Result of checking a single file.

    The file is compatible exactly when no failure reasons were recorded.
    """
    reasons: Tuple[FailureReason, ...] = ()

    @property
    def compatible(self) -> bool:
        return not self.reasons

    @property
    def messages(self) -> List[str]:
        return [reason.value for reason in self.reasons]
