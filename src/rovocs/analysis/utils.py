"""Ratio helpers shared by baseline, detection and quality scoring."""


def relative_change(new: float, old: float) -> float | None:
    """
    Relative change |new - old| / old.

    Returns:
        The ratio, or None when old is zero
    """
    if old == 0:
        return None
    return abs(new - old) / old


def relative_rise(value: float, reference: float) -> float | None:
    """
    Signed relative rise (value - reference) / reference.

    Returns:
        The ratio, or None when reference is zero
    """
    if reference == 0:
        return None
    return (value - reference) / reference
