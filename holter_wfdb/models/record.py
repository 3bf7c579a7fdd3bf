from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Signal:
    """
    Calibration descriptor of one channel, from one signal line of the header.

    filename: source label of the channel (e.g. 'REC01.dat'); not opened by the core.
    gain: ADC units per physical unit. gain == 0 yields non-finite samples.
    baseline: ADC value corresponding to 0 physical units.
    units: physical unit label (e.g. 'mV').
    fmt: storage format token as written in the header (only '16' is decoded).
    description: optional free-text lead description (e.g. 'MLII').
    """
    filename: str
    gain: float
    baseline: int
    units: str
    fmt: str = "16"
    description: Optional[str] = None


@dataclass(frozen=True)
class Metadata:
    """
    Record-level metadata parsed from a header.

    Notes
    - initial_date is a naive datetime: no timezone is assumed or applied.
    - signals keeps header order; index c describes channel c of the binary stream.
    - warnings holds non-fatal parser findings (e.g. signal line count != num_signals).
    """
    record_name: str
    num_signals: int
    sample_rate: int
    num_samples: int
    initial_date: datetime
    signals: Tuple[Signal, ...]
    comments: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def duration_s(self) -> float:
        if self.sample_rate <= 0:
            return float("nan")
        return self.num_samples / float(self.sample_rate)

    @property
    def end_date(self) -> Optional[datetime]:
        """Wall-clock time just after the last sample, or None without a sample rate."""
        if self.sample_rate <= 0:
            return None
        return self.initial_date + timedelta(seconds=self.duration_s)

    @property
    def channel_names(self) -> List[str]:
        """Column labels: the signal description when present, else 'ch<index>'."""
        names: List[str] = []
        for c in range(self.num_signals):
            desc = self.signals[c].description if c < len(self.signals) else None
            name = desc or f"ch{c}"
            # keep labels unique for DataFrame columns
            if name in names:
                name = f"{name}_{c}"
            names.append(name)
        return names


@dataclass(frozen=True)
class HolterData:
    """
    Decoded record: metadata plus calibrated samples.

    samples[c][i] is channel c at sample index i (float64).
    Wall clock of index i is initial_date + i / sample_rate.
    """
    metadata: Metadata
    samples: Tuple[np.ndarray, ...]

    @property
    def n_channels(self) -> int:
        return len(self.samples)

    def time_index(self) -> pd.DatetimeIndex:
        md = self.metadata
        if md.sample_rate <= 0:
            raise ValueError("sample_rate must be > 0 to build a time index")
        offsets = pd.to_timedelta(np.arange(md.num_samples) / float(md.sample_rate), unit="s")
        return pd.DatetimeIndex(pd.Timestamp(md.initial_date) + offsets, name="time")

    def to_frame(self) -> pd.DataFrame:
        """One float64 column per channel, indexed by wall-clock time."""
        cols = {name: np.asarray(x, dtype=np.float64) for name, x in zip(self.metadata.channel_names, self.samples)}
        return pd.DataFrame(cols, index=self.time_index())
