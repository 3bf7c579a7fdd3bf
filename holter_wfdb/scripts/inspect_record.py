"""
Record inspector.

Reads a WFDB Holter record (header + sample file), prints a compact summary and
optionally exports the calibrated, time-indexed samples to CSV.

Examples
--------
    python -m holter_wfdb.scripts.inspect_record data/REC01 --head 5
    python -m holter_wfdb.scripts.inspect_record data/REC01.hea --csv rec01.csv
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
import logging
import sys

import numpy as np

from holter_wfdb.ingest.binary import DecoderConfig
from holter_wfdb.ingest.errors import HolterParseError
from holter_wfdb.ingest.files import read_record
from holter_wfdb.models.record import HolterData


def summarize(data: HolterData) -> List[str]:
    md = data.metadata
    out = [
        f"record:      {md.record_name}",
        f"start:       {md.initial_date.isoformat(sep=' ')}",
        f"sample rate: {md.sample_rate} Hz",
        f"samples:     {md.num_samples} per channel",
        f"duration:    {md.duration_s:.3f} s",
        f"channels:    {md.num_signals}",
    ]
    for c, (name, x) in enumerate(zip(md.channel_names, data.samples)):
        sig = md.signals[c]
        finite = x[np.isfinite(x)]
        if finite.size:
            stats = f"min={finite.min():.6g} max={finite.max():.6g} mean={finite.mean():.6g}"
        elif x.size:
            stats = "no finite samples"
        else:
            stats = "empty"
        out.append(f"  [{c}] {name}: gain={sig.gain:g} baseline={sig.baseline} units={sig.units} {stats}")
    for msg in md.comments:
        out.append(f"# {msg}")
    for msg in md.warnings:
        out.append(f"[warn] {msg}")
    return out


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse

    def positive_int(text: str) -> int:
        try:
            n = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"expected a positive integer, got '{text}'") from None
        if n <= 0:
            raise argparse.ArgumentTypeError(f"expected a positive integer, got {n}")
        return n

    p = argparse.ArgumentParser(
        prog="python -m holter_wfdb.scripts.inspect_record",
        description="Decode a WFDB Holter record and print a summary.",
    )
    p.add_argument("record", help="Record path: 'REC', 'REC.hea' or 'REC.dat'")
    p.add_argument("--head", type=positive_int, default=None, help="Print the first N rows of the time-indexed table")
    p.add_argument("--csv", default=None, help="Write the time-indexed table to this CSV file")
    p.add_argument("--strict-gain", action="store_true", help="Reject signals with gain 0")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    ns = p.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = DecoderConfig(reject_zero_gain=bool(ns.strict_gain))
    try:
        data = read_record(ns.record, config=cfg)
    except (FileNotFoundError, HolterParseError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    for line in summarize(data):
        print(line)

    if ns.head or ns.csv:
        if data.metadata.sample_rate <= 0:
            print("[error] sample rate is 0; cannot build a time index", file=sys.stderr)
            return 1
        df = data.to_frame()
        if ns.head:
            print(df.head(ns.head).to_string())
        if ns.csv:
            out = Path(ns.csv).expanduser()
            df.to_csv(out)
            print(f"wrote: {out} ({len(df)} rows)")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
