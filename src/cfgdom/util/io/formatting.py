"""
Formatting utilities for human-readable output.
"""


def elapsedTime(t):
    """
    Format a time duration in seconds as a human-readable string.

    Picks milliseconds below one second, seconds below one minute, and
    minutes beyond that.

    Example:
        elapsedTime(0.05) -> "   50 ms"
    """
    if t < 1.0:
        return "%5.4g ms" % (t * 1000.0)
    elif t < 60.0:
        return "%5.4g s" % (t)
    else:
        return "%5.4g m" % (t / 60.0)


def idList(ids):
    """Render block ids in ascending order, comma separated."""
    return ", ".join(str(i) for i in sorted(ids))
