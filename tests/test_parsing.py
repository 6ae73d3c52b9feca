from placement_tracker.utils.parsing import (
    ParseResult, parse_decimal, parse_first_number, parse_instant, parse_int
)


def test_parse_int_reads_leading_integer():
    assert parse_int("12") == ParseResult.parsed(12)
    assert parse_int(" 12 people").value == 12
    assert parse_int("7.9").value == 7


def test_parse_int_absent_for_empty_or_non_numeric():
    assert parse_int("").ok is False
    assert parse_int(None).ok is False
    assert parse_int("twelve").ok is False
    assert parse_int("twelve").value is None


def test_parse_decimal():
    assert parse_decimal("7.5").value == 7.5
    assert parse_decimal("11").value == 11.0
    assert parse_decimal(".5").value == 0.5
    assert parse_decimal("8.25/10").value == 8.25
    assert parse_decimal("n/a").ok is False


def test_or_default():
    assert parse_decimal("").or_default(0.0) == 0.0
    assert parse_decimal("3").or_default(0.0) == 3.0


def test_first_number_takes_first_run_only():
    assert parse_first_number("12 LPA").value == 12
    assert parse_first_number("Base: 8L, Bonus: 2L").value == 8
    assert parse_first_number("INR 1,200,000 per annum").value == 1200000
    assert parse_first_number("up to 4.5 LPA").value == 4.5


def test_first_number_absent():
    assert parse_first_number("").ok is False
    assert parse_first_number(None).ok is False
    assert parse_first_number("Not disclosed").ok is False
    # A lone separator is not a number
    assert parse_first_number("T.B.D").ok is False


def test_parse_instant():
    assert parse_instant(None).ok is False
    assert parse_instant("yesterday").ok is False
    parsed = parse_instant("2026-03-01T06:30:00Z")
    assert parsed.ok
    assert parsed.value.utcoffset().total_seconds() == 0
