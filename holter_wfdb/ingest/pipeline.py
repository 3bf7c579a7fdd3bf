from __future__ import annotations

from typing import Optional
import logging

from holter_wfdb.ingest.binary import DecoderConfig, parse_binary_data
from holter_wfdb.ingest.errors import HolterParseError, RecordParseError
from holter_wfdb.ingest.header import parse_header
from holter_wfdb.models.record import HolterData, Metadata

logger = logging.getLogger(__name__)


def parse_header_stage(header_text: str) -> Metadata:
    """Header stage of parse(): failures become RecordParseError(stage='header')."""
    try:
        return parse_header(header_text)
    except HolterParseError as e:
        err = RecordParseError("header", e)
        logger.error("%s", err)
        raise err from e


def decode_with_metadata(
    buffer: bytes | bytearray | memoryview,
    metadata: Metadata,
    config: Optional[DecoderConfig] = None,
) -> HolterData:
    """Binary stage of parse() for an already parsed header."""
    try:
        samples = parse_binary_data(buffer, metadata, config)
    except HolterParseError as e:
        err = RecordParseError("binary", e, record_name=metadata.record_name)
        logger.error("%s", err)
        raise err from e
    return HolterData(metadata=metadata, samples=samples)


def parse(
    buffer: bytes | bytearray | memoryview,
    header_text: str,
    config: Optional[DecoderConfig] = None,
) -> HolterData:
    """
    Parse a header and its sample buffer into HolterData.

    Runs the header stage then the binary stage. A failure in either stage is
    re-raised as RecordParseError(stage=..., cause=...) chained to the original
    error; nothing is returned on failure.
    """
    metadata = parse_header_stage(header_text)
    return decode_with_metadata(buffer, metadata, config)
