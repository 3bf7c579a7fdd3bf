from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple
import logging

import numpy as np

from holter_wfdb.ingest.errors import InsufficientDataError, MetadataMismatchError, ZeroGainError
from holter_wfdb.models.record import Metadata

logger = logging.getLogger(__name__)

# WFDB format 16: two's complement, little-endian, 2 bytes per sample.
SAMPLE_DTYPE = np.dtype("<i2")
BYTES_PER_SAMPLE = SAMPLE_DTYPE.itemsize


@dataclass(frozen=True)
class DecoderConfig:
    """
    Binary decoder configuration.

    reject_zero_gain:
      - False (default): gain == 0 produces inf/NaN samples (IEEE-754 division).
      - True: raise ZeroGainError before decoding if any decoded channel has gain == 0.
    read_only:
      Mark returned sample arrays as non-writeable.
    """
    reject_zero_gain: bool = False
    read_only: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> DecoderConfig:
        return cls(**dict(d))


def required_bytes(metadata: Metadata) -> int:
    return int(metadata.num_signals) * int(metadata.num_samples) * BYTES_PER_SAMPLE


def parse_binary_data(
    buffer: bytes | bytearray | memoryview,
    metadata: Metadata,
    config: Optional[DecoderConfig] = None,
) -> Tuple[np.ndarray, ...]:
    """
    Decode an interleaved 16-bit sample stream into calibrated channels.

    Frame i holds num_signals consecutive '<i2' values in channel order, so the
    raw value of channel c at index i sits at byte offset (i * num_signals + c) * 2.
    Calibrated value = (raw - baseline[c]) / gain[c], in float64.

    Validation happens before any sample is decoded:
      - fewer signal descriptors than num_signals -> MetadataMismatchError
      - buffer shorter than num_signals * num_samples * 2 -> InsufficientDataError
    Trailing bytes beyond the required length are ignored.

    Returns a tuple of num_signals arrays, each of length num_samples.
    """
    cfg = config or DecoderConfig()
    n_sig = int(metadata.num_signals)
    n_samp = int(metadata.num_samples)

    if len(metadata.signals) < n_sig:
        raise MetadataMismatchError(expected=n_sig, actual=len(metadata.signals))

    mv = memoryview(buffer)
    if not mv.c_contiguous:
        mv = memoryview(mv.tobytes())
    raw_bytes = mv.cast("B")
    need = required_bytes(metadata)
    have = raw_bytes.nbytes
    if have < need:
        raise InsufficientDataError(expected_bytes=need, actual_bytes=have)

    signals = metadata.signals[:n_sig]
    if cfg.reject_zero_gain:
        for c, sig in enumerate(signals):
            if sig.gain == 0:
                raise ZeroGainError(channel=c)

    if have > need:
        logger.debug("%s: ignoring %d trailing bytes", metadata.record_name, have - need)

    if need == 0:
        raw = np.empty((0,), dtype=SAMPLE_DTYPE)
    else:
        raw = np.frombuffer(raw_bytes, dtype=SAMPLE_DTYPE, count=n_sig * n_samp)
    mat = raw.reshape(n_samp, n_sig).astype(np.float64)

    gain = np.array([s.gain for s in signals], dtype=np.float64)
    baseline = np.array([s.baseline for s in signals], dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        calibrated = (mat - baseline) / gain

    out = []
    for c in range(n_sig):
        # one contiguous array per channel
        x = np.ascontiguousarray(calibrated[:, c])
        if cfg.read_only:
            x.flags.writeable = False
        out.append(x)

    logger.debug("%s: decoded %d channels x %d samples from %d bytes", metadata.record_name, n_sig, n_samp, need)
    return tuple(out)
