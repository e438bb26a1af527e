"""Efficiency metric and its human-readable label."""

from __future__ import annotations

LOCALES: dict[str, dict[str, str]] = {
    "en": {
        "free": "{total} free days",
        "one": "Turn {leave} day into {total}",
        "many": "Turn {leave} days into {total}",
    },
    "el": {
        "free": "{total} δωρεάν ημέρες",
        "one": "Κάντε {leave} ημέρα {total}",
        "many": "Κάντε {leave} ημέρες {total}",
    },
}


def efficiency(total_days: int, leave_days: int) -> float:
    """Days off per leave day; *total_days* itself when no leave is needed."""
    # Length stands in for infinity so results stay sortable and serializable.
    if leave_days == 0:
        return float(total_days)
    return total_days / leave_days


def efficiency_label(leave_days: int, total_days: int, locale: str = "en") -> str:
    """Render e.g. ``"Turn 3 days into 9"``.

    Raises ``KeyError`` for an unsupported *locale*.
    """
    templates = LOCALES.get(locale)
    if templates is None:
        supported = ", ".join(sorted(LOCALES))
        msg = f"Unknown locale {locale!r}. Supported: {supported}"
        raise KeyError(msg)
    if leave_days == 0:
        key = "free"
    elif leave_days == 1:
        key = "one"
    else:
        key = "many"
    return templates[key].format(leave=leave_days, total=total_days)
