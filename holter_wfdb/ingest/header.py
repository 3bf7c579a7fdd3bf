from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple
import logging
import re

from holter_wfdb.ingest.errors import HeaderFormatError
from holter_wfdb.models.record import Metadata, Signal

logger = logging.getLogger(__name__)

RECORD_FIELDS: Tuple[str, ...] = (
    "record name",
    "signal count",
    "sample rate",
    "sample count",
    "start time",
    "start date",
)

# Candidate layouts for "<time> <date>", tried in order (WFDB writes DD/MM/YYYY).
_TIMESTAMP_FORMATS: Tuple[str, ...] = (
    "%H:%M:%S %d/%m/%Y",
    "%H:%M:%S.%f %d/%m/%Y",
    "%H:%M %d/%m/%Y",
)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")

# Signal line positions after the calibration token:
# adc resolution, adc zero, initial value, checksum, block size, description...
_DESCRIPTION_POS = 8


def _split_lines(header_text: str) -> Tuple[List[Tuple[int, str]], List[str]]:
    """
    Return ((line_number, line) for record/signal lines, comments).

    Blank lines are dropped; '#' lines are WFDB comments and are collected separately.
    line_number is 1-based in the original text.
    """
    lines: List[Tuple[int, str]] = []
    comments: List[str] = []
    for k, raw_line in enumerate(header_text.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("#"):
            comments.append(line[1:].strip())
            continue
        lines.append((k, line))
    return lines, comments


def _parse_int_field(token: str, field: str, *, minimum: int, line_number: int) -> int:
    if not _INT_RE.match(token):
        raise HeaderFormatError(f"{field} must be a base-10 integer, got '{token}'", token=token, line_number=line_number)
    value = int(token, 10)
    if value < minimum:
        raise HeaderFormatError(f"{field} must be >= {minimum}, got {value}", token=token, line_number=line_number)
    return value


def parse_timestamp(time_token: str, date_token: str) -> datetime:
    """
    Combine WFDB start time and date tokens into a naive datetime.

    No timezone is attached and no UTC conversion happens.
    """
    text = f"{time_token} {date_token}"
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise HeaderFormatError(f"cannot parse start timestamp from time '{time_token}' and date '{date_token}'", token=text)


def parse_calibration(token: str, *, line_number: Optional[int] = None) -> Tuple[float, int, str]:
    """
    Split a '<gain>(<baseline>)/<units>' token, e.g. '200(0)/mV' -> (200.0, 0, 'mV').
    """
    open_i = token.find("(")
    close_i = token.find(")", open_i + 1)
    slash_i = token.find("/", close_i + 1)
    if open_i < 0:
        raise HeaderFormatError(f"calibration token '{token}' is missing '('", token=token, line_number=line_number)
    if close_i < 0:
        raise HeaderFormatError(f"calibration token '{token}' is missing ')'", token=token, line_number=line_number)
    if slash_i < 0:
        raise HeaderFormatError(f"calibration token '{token}' is missing '/'", token=token, line_number=line_number)
    if slash_i != close_i + 1:
        raise HeaderFormatError(f"calibration token '{token}' has text between ')' and '/'", token=token, line_number=line_number)

    gain_txt = token[:open_i]
    baseline_txt = token[open_i + 1:close_i]
    if not _FLOAT_RE.match(gain_txt):
        raise HeaderFormatError(f"gain '{gain_txt}' in '{token}' is not a number", token=token, line_number=line_number)
    gain = float(gain_txt)
    if not _INT_RE.match(baseline_txt.strip()):
        raise HeaderFormatError(f"baseline '{baseline_txt}' in '{token}' is not an integer", token=token, line_number=line_number)
    baseline = int(baseline_txt.strip(), 10)
    units = token[slash_i + 1:]
    return gain, baseline, units


def parse_signal_line(line: str, *, line_number: Optional[int] = None) -> Signal:
    parts = line.split()
    if len(parts) < 3:
        raise HeaderFormatError(
            f"signal line needs at least 3 fields (filename, format, gain(baseline)/units), got {len(parts)}",
            token=line,
            line_number=line_number,
        )
    filename, fmt, calib = parts[0], parts[1], parts[2]
    gain, baseline, units = parse_calibration(calib, line_number=line_number)
    description = " ".join(parts[_DESCRIPTION_POS:]) or None
    return Signal(
        filename=filename,
        gain=gain,
        baseline=baseline,
        units=units,
        fmt=fmt,
        description=description,
    )


def parse_header(header_text: str) -> Metadata:
    """
    Parse WFDB header text into Metadata.

    Layout
      line 1 : <record> <n_signals> <sample_rate> <n_samples> <HH:MM:SS> <DD/MM/YYYY>
      line 2+: <filename> <format> <gain>(<baseline>)/<units> [... description]

    STRICT: the record line must have exactly six fields and every numeric field must
    parse. Any failure raises HeaderFormatError and no Metadata is produced.
    A signal line count different from n_signals is reported in Metadata.warnings only.
    """
    lines, comments = _split_lines(header_text)
    if not lines:
        raise HeaderFormatError("header has no record line")

    rec_no, rec_line = lines[0]
    tokens = rec_line.split()
    if len(tokens) != len(RECORD_FIELDS):
        raise HeaderFormatError(
            f"record line must have {len(RECORD_FIELDS)} fields ({', '.join(RECORD_FIELDS)}), got {len(tokens)}",
            token=rec_line,
            line_number=rec_no,
        )
    record_name, n_sig_tok, fs_tok, n_samp_tok, time_tok, date_tok = tokens

    num_signals = _parse_int_field(n_sig_tok, "signal count", minimum=1, line_number=rec_no)
    sample_rate = _parse_int_field(fs_tok, "sample rate", minimum=0, line_number=rec_no)
    num_samples = _parse_int_field(n_samp_tok, "sample count", minimum=0, line_number=rec_no)
    try:
        initial_date = parse_timestamp(time_tok, date_tok)
    except HeaderFormatError as e:
        raise HeaderFormatError(str(e), token=e.token, line_number=rec_no) from None

    signals = tuple(parse_signal_line(line, line_number=k) for k, line in lines[1:])

    warnings: List[str] = []
    if len(signals) != num_signals:
        warnings.append(f"record declares {num_signals} signals but header has {len(signals)} signal lines")
    for msg in warnings:
        logger.warning("%s: %s", record_name, msg)

    logger.debug(
        "parsed header %s: %d signals, %d Hz, %d samples, start %s",
        record_name, num_signals, sample_rate, num_samples, initial_date.isoformat(),
    )
    return Metadata(
        record_name=record_name,
        num_signals=num_signals,
        sample_rate=sample_rate,
        num_samples=num_samples,
        initial_date=initial_date,
        signals=signals,
        comments=tuple(comments),
        warnings=tuple(warnings),
    )
