import unittest
from datetime import datetime

from holter_wfdb.ingest.errors import HeaderFormatError
from holter_wfdb.ingest.header import parse_calibration, parse_header, parse_timestamp


HEADER = "\n".join(
    [
        "REC01 2 250 3 09:00:00 01/01/2024",
        "REC01.dat 16 200(0)/mV",
        "REC01.dat 16 100(10)/mV",
    ]
)


class TestRecordLine(unittest.TestCase):
    def test_scenario_header(self):
        md = parse_header(HEADER)
        self.assertEqual(md.record_name, "REC01")
        self.assertEqual(md.num_signals, 2)
        self.assertEqual(md.sample_rate, 250)
        self.assertEqual(md.num_samples, 3)
        self.assertEqual(md.initial_date, datetime(2024, 1, 1, 9, 0, 0))
        self.assertIsNone(md.initial_date.tzinfo)
        self.assertEqual(md.warnings, ())

    def test_date_is_day_first(self):
        md = parse_header("R 1 360 0 23:59:58 02/03/2021\nR.dat 16 200(0)/mV")
        self.assertEqual(md.initial_date, datetime(2021, 3, 2, 23, 59, 58))

    def test_blank_and_whitespace_lines_are_ignored(self):
        text = "\n\n   \n" + HEADER.replace("\n", "\n \t \n") + "\n\n"
        md = parse_header(text)
        self.assertEqual(len(md.signals), 2)

    def test_crlf_line_endings(self):
        md = parse_header(HEADER.replace("\n", "\r\n"))
        self.assertEqual(md.signals[1].units, "mV")

    def test_only_newline_separates_lines(self):
        # form feed / separator characters stay inside their line
        text = HEADER.replace("200(0)/mV", "200(0)/mV\x0c12\x1c0")
        md = parse_header(text)
        self.assertEqual(len(md.signals), 2)
        self.assertEqual(md.warnings, ())
        self.assertEqual(md.signals[0].units, "mV")

    def test_too_few_record_fields(self):
        with self.assertRaises(HeaderFormatError) as cm:
            parse_header("REC01 2 250 3 09:00:00\nREC01.dat 16 200(0)/mV")
        self.assertIn("6 fields", str(cm.exception))
        self.assertEqual(cm.exception.line_number, 1)

    def test_too_many_record_fields(self):
        with self.assertRaises(HeaderFormatError):
            parse_header("REC01 2 250 3 09:00:00 01/01/2024 extra")

    def test_non_numeric_fields(self):
        for bad in (
            "REC01 two 250 3 09:00:00 01/01/2024",
            "REC01 2 25.0 3 09:00:00 01/01/2024",
            "REC01 2 250 x3 09:00:00 01/01/2024",
        ):
            with self.assertRaises(HeaderFormatError, msg=bad):
                parse_header(bad)

    def test_signal_count_must_be_positive(self):
        with self.assertRaises(HeaderFormatError) as cm:
            parse_header("REC01 0 250 3 09:00:00 01/01/2024")
        self.assertEqual(cm.exception.token, "0")

    def test_negative_sample_count_rejected(self):
        with self.assertRaises(HeaderFormatError):
            parse_header("REC01 1 250 -3 09:00:00 01/01/2024\nREC01.dat 16 200(0)/mV")

    def test_bad_timestamp(self):
        with self.assertRaises(HeaderFormatError) as cm:
            parse_header("REC01 1 250 3 25:00:00 01/01/2024\nREC01.dat 16 200(0)/mV")
        self.assertIn("25:00:00", str(cm.exception))

    def test_empty_header(self):
        with self.assertRaises(HeaderFormatError):
            parse_header("\n  \n")

    def test_comments_are_collected(self):
        text = "# Holter 24h\n" + HEADER + "\n#   age: 61 sex: F"
        md = parse_header(text)
        self.assertEqual(md.comments, ("Holter 24h", "age: 61 sex: F"))
        self.assertEqual(len(md.signals), 2)


class TestSignalLines(unittest.TestCase):
    def test_calibration_fields(self):
        md = parse_header(HEADER)
        s0, s1 = md.signals
        self.assertEqual((s0.filename, s0.fmt, s0.gain, s0.baseline, s0.units), ("REC01.dat", "16", 200.0, 0, "mV"))
        self.assertEqual((s1.gain, s1.baseline, s1.units), (100.0, 10, "mV"))
        self.assertIsNone(s0.description)

    def test_missing_parenthesis_or_slash(self):
        for token in ("200/mV", "200(0)mV", "200(0/mV", "200(0)junk/mV"):
            text = f"REC01 1 250 3 09:00:00 01/01/2024\nREC01.dat 16 {token}"
            with self.assertRaises(HeaderFormatError, msg=token) as cm:
                parse_header(text)
            self.assertEqual(cm.exception.token, token)
            self.assertEqual(cm.exception.line_number, 2)

    def test_non_numeric_gain_and_baseline(self):
        for token in ("abc(0)/mV", "200(x)/mV", "200(1.5)/mV", "(0)/mV", "nan(0)/mV", "inf(0)/mV", "1_0(0)/mV"):
            with self.assertRaises(HeaderFormatError, msg=token):
                parse_calibration(token)

    def test_negative_baseline_and_fractional_gain(self):
        self.assertEqual(parse_calibration("1.5e2(-1024)/uV"), (150.0, -1024, "uV"))

    def test_signal_line_needs_three_fields(self):
        with self.assertRaises(HeaderFormatError):
            parse_header("REC01 1 250 3 09:00:00 01/01/2024\nREC01.dat 16")

    def test_description_after_block_size(self):
        text = "R 1 128 10 00:00:00 01/01/2000\nR.dat 16 200(0)/mV 12 0 -7 1234 0 MLII lead"
        md = parse_header(text)
        self.assertEqual(md.signals[0].description, "MLII lead")
        self.assertEqual(md.channel_names, ["MLII lead"])

    def test_signal_count_mismatch_is_a_warning(self):
        text = "R 3 128 10 00:00:00 01/01/2000\nR.dat 16 200(0)/mV"
        md = parse_header(text)
        self.assertEqual(md.num_signals, 3)
        self.assertEqual(len(md.signals), 1)
        self.assertEqual(len(md.warnings), 1)
        self.assertIn("3 signals", md.warnings[0])


class TestTimestamp(unittest.TestCase):
    def test_fractional_seconds_and_short_time(self):
        self.assertEqual(parse_timestamp("10:20:30.5", "31/12/1999"), datetime(1999, 12, 31, 10, 20, 30, 500000))
        self.assertEqual(parse_timestamp("10:20", "31/12/1999"), datetime(1999, 12, 31, 10, 20))

    def test_invalid_date(self):
        with self.assertRaises(HeaderFormatError):
            parse_timestamp("10:20:30", "31/02/2000")


if __name__ == "__main__":
    unittest.main()
