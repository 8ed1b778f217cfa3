"""Shared test fixtures -- synthetic TIFF file generators."""

import struct
import pytest


# 1x1 pixel, 8-bit grayscale, uncompressed.
IMAGE_TAGS = [
    (256, 3, 1, 1),   # ImageWidth
    (257, 3, 1, 1),   # ImageLength
    (258, 3, 1, 8),   # BitsPerSample
    (259, 3, 1, 1),   # Compression: none
    (262, 3, 1, 1),   # PhotometricInterpretation: BlackIsZero
    (277, 3, 1, 1),   # SamplesPerPixel
    (278, 3, 1, 1),   # RowsPerStrip
]

PREDICTOR_TAG = (317, 3, 1, 2)  # Predictor: horizontal differencing

LAYER_DATA = b'Adobe Photoshop Document Data Block\x00' + b'\x00' * 28
IMAGE_SOURCE_DATA_TAG = (37724, 7, len(LAYER_DATA), LAYER_DATA)


def _pack_entry(endian, tag_id, type_id, count, value):
    entry = struct.pack(endian + 'HHI', tag_id, type_id, count)
    if type_id == 3 and count == 1:
        # SHORT values are left-justified in the 4-byte value field
        return entry + struct.pack(endian + 'HH', value, 0)
    return entry + struct.pack(endian + 'I', value)


def build_tiff_multi_ifd(ifd_entries_list, endian='<', strip_data=b'\x80'):
    """Build a TIFF with linked IFDs, each pointing at its own strip.

    Args:
        ifd_entries_list: List of lists, each inner list contains
            (tag_id, type_id, count, value_or_bytes) tuples for one IFD.
            Entries are written in the order given.
        endian: '<' for little-endian, '>' for big-endian.
        strip_data: Image bytes stored after each IFD's out-of-line data.
            StripOffsets (273) and StripByteCounts (279) are appended.

    Returns:
        bytes: Complete TIFF file content.
    """
    bo = b'II' if endian == '<' else b'MM'

    # Compute start offset for each IFD
    ifd_starts = []
    offset = 8  # After header
    for entries in ifd_entries_list:
        ifd_starts.append(offset)
        n = len(entries) + 2
        ool_size = sum(len(v) for _, _, _, v in entries if isinstance(v, bytes))
        offset += 2 + 12 * n + 4 + ool_size + len(strip_data)

    result = bo + struct.pack(endian + 'H', 42)
    result += struct.pack(endian + 'I', ifd_starts[0])

    for i, entries in enumerate(ifd_entries_list):
        n = len(entries) + 2
        data_start = ifd_starts[i] + 2 + 12 * n + 4

        ifd_bytes = struct.pack(endian + 'H', n)
        data_bytes = b''

        for tag_id, type_id, count, value in entries:
            if isinstance(value, bytes):
                val_offset = data_start + len(data_bytes)
                ifd_bytes += _pack_entry(endian, tag_id, type_id, count, val_offset)
                data_bytes += value
            else:
                ifd_bytes += _pack_entry(endian, tag_id, type_id, count, value)

        strip_offset = data_start + len(data_bytes)
        ifd_bytes += _pack_entry(endian, 273, 4, 1, strip_offset)
        ifd_bytes += _pack_entry(endian, 279, 4, 1, len(strip_data))

        if i + 1 < len(ifd_entries_list):
            next_ifd = ifd_starts[i + 1]
        else:
            next_ifd = 0
        ifd_bytes += struct.pack(endian + 'I', next_ifd)

        result += ifd_bytes + data_bytes + strip_data

    return result


def build_tiff_with_strips(tag_entries, endian='<'):
    """Build a single-IFD TIFF with a one-byte image strip."""
    return build_tiff_multi_ifd([tag_entries], endian=endian)


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def flat_tiff_bytes():
    return build_tiff_with_strips(IMAGE_TAGS)


@pytest.fixture
def tmp_tiff_flat(tmp_path, flat_tiff_bytes):
    """A minimal single-layer, uncompressed TIFF."""
    filepath = tmp_path / 'flat.tif'
    filepath.write_bytes(flat_tiff_bytes)
    return filepath


@pytest.fixture
def tmp_tiff_layered(tmp_path):
    """A TIFF carrying Photoshop layer data (ImageSourceData)."""
    filepath = tmp_path / 'layered.tif'
    filepath.write_bytes(build_tiff_with_strips(IMAGE_TAGS + [IMAGE_SOURCE_DATA_TAG]))
    return filepath


@pytest.fixture
def tmp_tiff_predictor(tmp_path):
    """A TIFF with a Predictor tag."""
    filepath = tmp_path / 'predictor.tif'
    filepath.write_bytes(build_tiff_with_strips(IMAGE_TAGS + [PREDICTOR_TAG]))
    return filepath


@pytest.fixture
def tmp_empty_file(tmp_path):
    filepath = tmp_path / 'empty.tif'
    filepath.write_bytes(b'')
    return filepath
