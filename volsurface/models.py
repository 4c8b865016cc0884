"""Option records received from the exchange and their conversion into plot points."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from datetime import date
from typing import Any

import numpy as np

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_EXPIRY_RE = re.compile(r"\s*(\d{1,2})([A-Za-z]{3})(\d{2})")


def _to_f32(value: float) -> float:
    """Round a float to single precision, as the plotting pipeline stores it."""
    with np.errstate(over="ignore"):
        return float(np.float32(value))


def _parse_expiry(text: str) -> date:
    """Parse an expiry such as ``27JUN25`` or ``5JUL25``."""
    match = _EXPIRY_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"Invalid expiry: {text!r}")
    day_text, month_text, year_text = match.groups()
    month = _MONTHS.get(month_text.lower())
    if month is None:
        raise ValueError(f"Invalid expiry month: {month_text!r}")
    short_year = int(year_text)
    year = 2000 + short_year if short_year < 70 else 1900 + short_year
    return date(year, month, int(day_text))


def _parse_strike(text: str) -> float:
    if not text or "_" in text or text != text.strip():
        raise ValueError(f"Invalid strike: {text!r}")
    return float(text)


class OptionSide(enum.Enum):
    """Whether an option is a call or a put."""

    CALL = "C"
    PUT = "P"


@dataclass(frozen=True)
class DeribitDataPoint:
    """A point of the surface: strike, days to expiry and implied volatility."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class FullDeribitOption:
    """An option with its instrument name decoded and its implied volatility."""

    underlying: str
    expiry: date
    strike: float
    side: OptionSide
    iv: float

    def into_data_point(self, today: date | None = None) -> DeribitDataPoint:
        """Convert to a surface point, measuring days to expiry from ``today``."""
        if today is None:
            today = date.today()
        days = float((self.expiry - today).days)
        return DeribitDataPoint(x=self.strike, y=days, z=_to_f32(self.iv))


@dataclass(frozen=True)
class DeribitOptionStringObject:
    """The parts of an instrument name such as ``BTC-27JUN25-100000-C``."""

    underlying: str
    expiry: date
    strike: float
    side: OptionSide

    @classmethod
    def from_str(cls, s: str) -> DeribitOptionStringObject:
        """Decode an instrument name; raise ValueError if it is malformed."""
        parts = s.split("-")
        if len(parts) != 4:
            raise ValueError(f"Invalid option format: {s}")
        raw_underlying, raw_expiry, raw_strike, raw_side = parts
        expiry = _parse_expiry(raw_expiry)
        strike = _parse_strike(raw_strike)
        try:
            side = OptionSide(raw_side)
        except ValueError:
            raise ValueError("Invalid option side") from None
        return cls(underlying=raw_underlying, expiry=expiry, strike=strike, side=side)


@dataclass(frozen=True)
class RawDeribitOption:
    """One option entry as delivered by the mark-price channel."""

    iv: float
    instrument_name: str

    @classmethod
    def from_dict(cls, data: Any) -> RawDeribitOption:
        """Build from a decoded JSON object; raise ValueError on a wrong shape."""
        if not isinstance(data, dict):
            raise ValueError("Option entry must be an object")
        iv = data.get("iv")
        name = data.get("instrument_name")
        if isinstance(iv, bool) or not isinstance(iv, (int, float)):
            raise ValueError("Option entry needs a numeric 'iv'")
        if not isinstance(name, str):
            raise ValueError("Option entry needs a string 'instrument_name'")
        return cls(iv=float(iv), instrument_name=name)

    def into_full(self) -> FullDeribitOption | None:
        """Decode the instrument name; None if it cannot be decoded."""
        try:
            parsed = DeribitOptionStringObject.from_str(self.instrument_name)
        except ValueError:
            return None
        return FullDeribitOption(
            underlying=parsed.underlying,
            expiry=parsed.expiry,
            strike=parsed.strike,
            side=parsed.side,
            iv=self.iv,
        )


def parse_message(text: str) -> list[RawDeribitOption] | None:
    """Decode a websocket message; return its option data, or None if it has no params."""
    message = json.loads(text)
    if not isinstance(message, dict):
        raise ValueError("Message must be a JSON object")
    params = message.get("params")
    if params is None:
        return None
    if not isinstance(params, dict) or not isinstance(params.get("data"), list):
        raise ValueError("Message params need a 'data' list")
    return [RawDeribitOption.from_dict(entry) for entry in params["data"]]