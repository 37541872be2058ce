# utils/currency.py
import math
from typing import Optional, Union

Number = Union[str, float, int, None]


# ----------------------------------------------------------------------
# Helper Functions: raw input -> float
# ----------------------------------------------------------------------

def clean_currency(val: Number, default: float = 0.0) -> float:
    """
    Cleans a currency string (e.g., "$140,000.00") into a float (140000.0).
    Empty, unparseable or non-finite input returns `default`.
    """
    if val is None or isinstance(val, bool):
        return default

    if isinstance(val, (int, float)):
        return float(val) if math.isfinite(val) else default

    # Strip currency symbol and thousands separators, then convert to float.
    cleaned_val = str(val).replace('$', '').replace(',', '').strip()
    if not cleaned_val:
        return default
    try:
        number = float(cleaned_val)
    except ValueError:
        return default
    return number if math.isfinite(number) else default


def clean_percent(raw_input: Number, default: float = 0.0) -> float:
    """
    Converts a whole-percent entry ('6', '6%', 6, '0.5') into a fraction
    (0.06, 0.06, 0.06, 0.005). `default` is given in percent as well.
    """
    if isinstance(raw_input, str):
        raw_input = raw_input.replace('%', '')
    return clean_currency(raw_input, default) / 100.0


# ----------------------------------------------------------------------
# Helper Functions: float -> display string
# ----------------------------------------------------------------------

def format_currency(value: Optional[float]) -> str:
    """Whole dollars, always rounded UP (1234.01 -> '$1,235'); None -> '-'."""
    if value is None:
        return "-"
    return f"${math.ceil(value):,}"


def format_percent_output(value: Optional[float], decimal_places: int = 2) -> str:
    """Fraction to percent string (0.0375 -> '3.75%'); None -> '-'."""
    if value is None:
        return "-"
    return f"{value * 100:.{decimal_places}f}%"
