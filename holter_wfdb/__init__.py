"""Holter WFDB -- Python tooling for WFDB-style Holter ECG recordings.

This package provides tools for:
- Parsing WFDB headers (record line, per-channel calibration, comments)
- Decoding interleaved 16-bit little-endian sample files into calibrated channels
- Building time-indexed tables of a record for analysis and export
- Inspecting records from the command line

Key principles:
- Strict parsing: malformed input raises a typed error, never a partial result
- Calibration is exactly (raw - baseline) / gain per channel
- No timezone is assumed: start timestamps are naive

Main subpackages:
- ingest: Header parser, binary decoder, orchestration and file helpers
- models: Data models (Signal, Metadata, HolterData)
- scripts: Command-line record inspector
"""

from .ingest import (
    DecoderConfig,
    HeaderFormatError,
    HolterParseError,
    InsufficientDataError,
    MetadataMismatchError,
    RecordParseError,
    ZeroGainError,
    parse,
    parse_binary_data,
    parse_header,
    read_record,
)
from .models import HolterData, Metadata, Signal

__all__ = [
    "DecoderConfig",
    "HeaderFormatError",
    "HolterData",
    "HolterParseError",
    "InsufficientDataError",
    "Metadata",
    "MetadataMismatchError",
    "RecordParseError",
    "Signal",
    "ZeroGainError",
    "parse",
    "parse_binary_data",
    "parse_header",
    "read_record",
]
