"""Exstream importer compatibility checks for TIFF files.

A TIFF is rejected when any of its directories carries a tag listed in
RULES. Tag parsing is done by tifffile; this module only walks the parsed
directories and fields in file order.

See also:
    https://www.awaresystems.be/imaging/tiff/tifftags/imagesourcedata.html
    https://www.awaresystems.be/imaging/tiff/tifftags/predictor.html
"""

import contextlib
import io
import logging
from typing import BinaryIO, Iterable, List, Union

import tifffile

from tifcompat.models import FailureReason, ScanMode, TagRule, Verdict

logger = logging.getLogger(__name__)

# Disqualifying tags, checked against every field of every directory.
RULES = (
    # Not flattened (Photoshop layer data)
    TagRule(37724, 'ImageSourceData', FailureReason.LAYERS),
    # Compressed with a predictor
    TagRule(317, 'Predictor', FailureReason.PREDICTOR),
)

Source = Union[bytes, bytearray, memoryview, BinaryIO]


def _scan_directory(tags, mode: ScanMode, reasons: List[FailureReason]) -> bool:
    """Record rule hits for one directory. Returns True to stop scanning."""
    for tag in tags:
        for rule in RULES:
            if not rule.matches(tag.code, tag.name):
                continue
            logger.debug("tag %d (%s) matched: %s",
                         tag.code, tag.name, rule.reason.value)
            if rule.reason not in reasons:
                reasons.append(rule.reason)
            if mode is ScanMode.FAIL_FAST:
                return True
    return bool(reasons)


def scan_directories(directories: Iterable, mode: ScanMode = ScanMode.COLLECT_ALL) -> Verdict:
    """Apply RULES to parsed directories.

    Args:
        directories: Iterable of objects with a ``tags`` mapping whose
            values expose ``code`` and ``name`` (tifffile pages).
        mode: FAIL_FAST stops at the first matching field; COLLECT_ALL
            finishes the directory holding the first match.

    Returns:
        Verdict with the distinct reasons found, in order of discovery.
        A file without any directory is not a TIFF.
    """
    reasons: List[FailureReason] = []
    seen = 0
    for directory in directories:
        seen += 1
        if _scan_directory(directory.tags.values(), mode, reasons):
            break
    if not seen:
        return Verdict(reasons=(FailureReason.NOT_TIFF,))
    return Verdict(reasons=tuple(reasons))


def check_tiff(tif, mode: ScanMode = ScanMode.COLLECT_ALL) -> Verdict:
    """Check an already-opened tifffile.TiffFile (or anything shaped like one).

    tifffile reads later pages lazily, so errors can surface while
    iterating. They are reported as NOT_TIFF like a failed parse.
    """
    try:
        return scan_directories(tif.pages, mode)
    except Exception as e:
        logger.debug("reading TIFF directories failed: %s", e)
        return Verdict(reasons=(FailureReason.NOT_TIFF,))


class _ParserProblems(logging.Handler):
    """Collects the records tifffile logs instead of raising."""

    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.records: List[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@contextlib.contextmanager
def _capture_parser_problems():
    """Swallow tifffile's log output for the duration, collecting problems.

    tifffile skips damaged tags and directory links with a logged message
    and keeps what it could read, so a logged warning or error means the
    parsed structure is incomplete.
    """
    parser_logger = logging.getLogger('tifffile')
    handler = _ParserProblems()
    propagate = parser_logger.propagate
    parser_logger.addHandler(handler)
    parser_logger.propagate = False
    try:
        yield handler.records
    finally:
        parser_logger.removeHandler(handler)
        parser_logger.propagate = propagate


def check(source: Source, mode: ScanMode = ScanMode.COLLECT_ALL) -> Verdict:
    """Return whether the source is an Exstream importer compatible TIFF.

    Args:
        source: Raw file content, or a seekable binary stream such as an
            open file. Streams are left open.
        mode: Scan mode, see scan_directories().

    Returns:
        Verdict. A source tifffile cannot parse, or only parses partially,
        yields the single reason FailureReason.NOT_TIFF.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))

    with _capture_parser_problems() as problems:
        try:
            tif = tifffile.TiffFile(source)
        except Exception as e:
            logger.debug("not a TIFF file: %s", e)
            return Verdict(reasons=(FailureReason.NOT_TIFF,))

        with tif:
            verdict = check_tiff(tif, mode)

    if problems:
        for record in problems:
            logger.debug("tifffile: %s", record.getMessage())
        return Verdict(reasons=(FailureReason.NOT_TIFF,))
    return verdict
