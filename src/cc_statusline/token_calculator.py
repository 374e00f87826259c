"""Token usage arithmetic and token count formatting."""

from __future__ import annotations

from fractions import Fraction

from .models import StatusInput, UsageMetrics

# Claude Code compacts the conversation once only 22% of the window remains.
AUTO_COMPACT_THRESHOLD = 22
COMPACT_USED_PERCENT = 100 - AUTO_COMPACT_THRESHOLD


def clamp_percent(percent: int) -> int:
    """Clamp a usage percentage to the 0-100 range."""
    return max(0, min(100, percent))


def _share_of(total: int, percent: float) -> int:
    """``total * percent / 100`` truncated toward zero, exact for any magnitude."""
    return int(Fraction(percent) * total / 100)


def calculate_usage(status: StatusInput) -> UsageMetrics:
    """Calculate used tokens, usage percentage and the distance to auto-compact.

    A precalculated percentage from the payload is authoritative: the used
    token count is derived back from it so the label and the bar agree.

    Args:
        status: Normalized status input

    Returns:
        Usage metrics for the bar and labels
    """
    window = status.context_window_size
    used_tokens = status.total_input_tokens + status.total_output_tokens + status.cache_read_tokens

    if status.precalculated_percentage is not None:
        percent = int(status.precalculated_percentage)
        used_tokens = _share_of(window, percent)
    elif window > 0:
        percent = int(Fraction(used_tokens * 100, window))
    else:
        percent = 0

    remaining = calculate_remaining_until_compact(status)

    return UsageMetrics(
        used_tokens=used_tokens,
        usage_percent=clamp_percent(percent),
        remaining_until_compact_percent=remaining,
        remaining_until_compact_tokens=_share_of(window, remaining),
    )


def calculate_remaining_until_compact(status: StatusInput) -> float:
    """Percentage points of the window left before auto-compact kicks in."""
    if status.until_compact_percentage is not None:
        return max(0.0, status.until_compact_percentage)
    remaining = status.remaining_percentage or 0.0
    return max(0.0, remaining - AUTO_COMPACT_THRESHOLD)


def format_token_count(count: int) -> str:
    """Format a token count without decimals, e.g. ``124k`` or ``1M``."""
    if count >= 1_000_000:
        return f"{count // 1_000_000}M"
    if count >= 1000:
        return f"{count // 1000}k"
    return str(count)


def format_token_count_decimal(count: int) -> str:
    """Format a token count with one truncated decimal, e.g. ``45.2k``."""
    if count >= 1_000_000:
        return f"{count // 1_000_000}.{(count % 1_000_000) // 100_000}M"
    if count >= 1000:
        return f"{count // 1000}.{(count % 1000) // 100}k"
    return str(count)
