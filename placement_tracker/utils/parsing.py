"""
Best-effort parsing for free-form text fields.

Every parser returns a ParseResult instead of raising, so callers decide
per field whether an unparsable value becomes absent, a default, or an
error:

    parse_int("12 people").value        -> 12
    parse_decimal("").or_default(0.0)   -> 0.0
    parse_decimal("abc").ok             -> False
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

# Leading numeric prefixes, the way lenient form parsing reads "7.5/10" as 7.5
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
# First run of digits, commas and decimal points anywhere in the text
_NUMERIC_RUN = re.compile(r"([\d,.]+)")


@dataclass(frozen=True)
class ParseResult:
    value: Any = None
    ok: bool = False

    @classmethod
    def parsed(cls, value: Any) -> "ParseResult":
        return cls(value=value, ok=True)

    @classmethod
    def absent(cls) -> "ParseResult":
        return cls()

    def or_default(self, default: Any) -> Any:
        return self.value if self.ok else default


def parse_int(text: Optional[str]) -> ParseResult:
    """Parse a leading integer; empty or non-numeric text is absent."""
    if not text:
        return ParseResult.absent()
    match = _INT_PREFIX.match(text)
    if not match:
        return ParseResult.absent()
    return ParseResult.parsed(int(match.group(1)))


def parse_decimal(text: Optional[str]) -> ParseResult:
    """Parse a leading decimal number; empty or non-numeric text is absent."""
    if not text:
        return ParseResult.absent()
    match = _DECIMAL_PREFIX.match(text)
    if not match:
        return ParseResult.absent()
    return ParseResult.parsed(float(match.group(1)))


def parse_first_number(text: Optional[str]) -> ParseResult:
    """
    Parse the first run of digits/commas/points found anywhere in the text.

    Commas are thousands separators and are stripped:
        "12 LPA"               -> 12
        "Base: 8L, Bonus: 2L"  -> 8
        "1,200,000 INR"        -> 1200000
    """
    if not text:
        return ParseResult.absent()
    match = _NUMERIC_RUN.search(text)
    if not match:
        return ParseResult.absent()
    # "8," or "1.2.3" leave a valid decimal prefix behind after stripping
    return parse_decimal(match.group(1).replace(",", ""))


def parse_instant(value: Union[datetime, str, None]) -> ParseResult:
    """
    Read a stored instant. Strings are ISO-8601; naive values are UTC.
    """
    if value is None or value == "":
        return ParseResult.absent()
    if isinstance(value, datetime):
        instant = value
    else:
        try:
            instant = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return ParseResult.absent()
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return ParseResult.parsed(instant)
