"""
Display helpers — weights are stored in kg and converted only here.
"""
import math

KG_TO_LB = 2.20462262

UNIT_SUFFIX = {"metric": "kg", "imperial": "lb"}


def convert_weight(kg: float, unit: str = "metric") -> float:
    if unit == "imperial":
        return kg * KG_TO_LB
    return kg


def _trim(value: float, digits: int = 1) -> str:
    text = f"{value:,.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_weight(kg: float, unit: str = "metric") -> str:
    """1250 → '1,250 kg'; imperial converts first."""
    return f"{_trim(convert_weight(kg, unit))} {UNIT_SUFFIX.get(unit, 'kg')}"


def format_milestone_weight(kg: float) -> str:
    if kg >= 1000:
        return f"{kg / 1000:.1f} t"
    return f"{kg:.0f} kg"


def format_lifetime_weight(kg: float, unit: str = "metric") -> str:
    if kg >= 1_000_000:
        return f"{kg / 1_000_000:.2f} M kg"
    if kg >= 1000:
        return f"{kg / 1000:.1f} t"
    return format_weight(kg, unit)


def format_percent_change(change: float | None) -> str | None:
    """0.1 → '+10%', -0.025 → '-2.5%'. Nothing to show for None/0/inf."""
    if change is None or change == 0 or not math.isfinite(change):
        return None
    sign = "+" if change > 0 else ""
    return f"{sign}{_trim(change * 100)}%"
