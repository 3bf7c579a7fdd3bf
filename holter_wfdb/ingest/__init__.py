"""Ingest package - WFDB header parsing and sample decoding.

This package handles:
- Parsing the text header (record line + one line per signal)
- Decoding the interleaved 16-bit little-endian sample stream
- Sequencing both stages with stage-tagged errors
- Locating and reading header/sample files on disk

Key entry points:
- parse_header: header text -> Metadata
- parse_binary_data: (bytes, Metadata) -> calibrated channels
- parse: (bytes, header text) -> HolterData
- read_record: record path -> HolterData

Design principle:
- The core never touches the filesystem; only files.read_record does
- Validation happens before decoding; no partial results
"""

from .binary import DecoderConfig, parse_binary_data, required_bytes
from .errors import (
    HeaderFormatError,
    HolterParseError,
    InsufficientDataError,
    MetadataMismatchError,
    RecordParseError,
    ZeroGainError,
)
from .files import find_dat_file, read_record
from .header import parse_header
from .pipeline import decode_with_metadata, parse, parse_header_stage

__all__ = [
    "DecoderConfig",
    "HeaderFormatError",
    "HolterParseError",
    "InsufficientDataError",
    "MetadataMismatchError",
    "RecordParseError",
    "ZeroGainError",
    "decode_with_metadata",
    "find_dat_file",
    "parse",
    "parse_binary_data",
    "parse_header",
    "parse_header_stage",
    "read_record",
    "required_bytes",
]
