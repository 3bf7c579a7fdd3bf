from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging

from holter_wfdb.ingest.binary import DecoderConfig
from holter_wfdb.ingest.pipeline import decode_with_metadata, parse_header_stage
from holter_wfdb.models.record import HolterData, Metadata

logger = logging.getLogger(__name__)

HEADER_SUFFIX = ".hea"
DATA_SUFFIX = ".dat"


def header_path_for(record_path: str | Path) -> Path:
    """Accept 'rec', 'rec.hea' or 'rec.dat' and return the header path."""
    p = Path(record_path).expanduser().resolve()
    if p.suffix.lower() == HEADER_SUFFIX:
        return p
    if p.suffix.lower() == DATA_SUFFIX:
        return p.with_suffix(HEADER_SUFFIX)
    return p.with_name(p.name + HEADER_SUFFIX)


def find_dat_file(header_path: str | Path, metadata: Metadata) -> Path:
    """
    Locate the sample file of a record.

    Order:
      1) filename of the first signal, relative to the header directory
      2) <record_name>.dat next to the header
    """
    hp = Path(header_path)
    candidates = []
    if metadata.signals:
        candidates.append(hp.parent / metadata.signals[0].filename)
    candidates.append(hp.parent / f"{metadata.record_name}{DATA_SUFFIX}")
    for cand in candidates:
        if cand.exists() and cand.is_file():
            return cand
    tried = ", ".join(str(c) for c in candidates)
    raise FileNotFoundError(f"No sample file for record '{metadata.record_name}' (tried: {tried})")


def read_record(record_path: str | Path, config: Optional[DecoderConfig] = None) -> HolterData:
    """
    Read a record from disk (header + sample file) and decode it.

    The header is parsed once; it locates the sample file and drives decoding.
    Parse failures carry stage context (RecordParseError).
    """
    hp = header_path_for(record_path)
    if not hp.exists():
        raise FileNotFoundError(str(hp))
    header_text = hp.read_text(encoding="utf-8", errors="ignore")

    metadata = parse_header_stage(header_text)
    dat = find_dat_file(hp, metadata)

    buffer = dat.read_bytes()
    logger.debug("read %s (%d bytes) and %s", hp.name, len(buffer), dat.name)
    return decode_with_metadata(buffer, metadata, config)
