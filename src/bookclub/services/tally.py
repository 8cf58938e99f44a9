"""Pure vote-count reconciliation for optimistic client edits.

A client editing its availability holds three things: the per-date counts last
fetched from the server (which already include the viewer's saved votes), the
selection the viewer had when the edit began, and the selection as it is now.
The functions here derive the counts to display from those three inputs
without touching the database.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping


def adjusted_count(
    server_count: int,
    *,
    initially_selected: bool,
    currently_selected: bool,
) -> int:
    """Return one option's displayed count, never below zero."""
    if currently_selected and not initially_selected:
        return server_count + 1
    if initially_selected and not currently_selected:
        return max(0, server_count - 1)
    return max(0, server_count)


def adjusted_counts(
    server_snapshot: Mapping[str, int],
    initial_selection: Iterable[str],
    current_selection: Iterable[str],
) -> dict[str, int]:
    """Reconcile a viewer's in-progress selection against a server snapshot.

    Comparison is against ``initial_selection`` rather than server truth,
    because the snapshot already counts the viewer's saved votes.

    Args:
        server_snapshot: Option -> vote count as last fetched
        initial_selection: Options the viewer had selected when the edit began
        current_selection: Options the viewer has selected now

    Returns:
        Option -> displayed count for every option that appears in any input.
    """
    initial = set(initial_selection)
    current = set(current_selection)
    options = set(server_snapshot) | initial | current
    return {
        option: adjusted_count(
            server_snapshot.get(option, 0),
            initially_selected=option in initial,
            currently_selected=option in current,
        )
        for option in sorted(options)
    }


def peak(counts: Mapping[str, int], month: str | None = None) -> tuple[int, list[str]]:
    """Return the highest count and the dates holding it.

    Args:
        counts: ``YYYY-MM-DD`` -> count, typically from :func:`adjusted_counts`
        month: Restrict to dates in this ``YYYY-MM`` month when given

    Returns:
        ``(max_count, dates)``; dates is empty when every count is zero.
    """
    prefix = f"{month}-" if month else ""
    in_view = {day: count for day, count in counts.items() if day.startswith(prefix)}
    best = max(in_view.values(), default=0)
    if best <= 0:
        return 0, []
    return best, sorted(day for day, count in in_view.items() if count == best)
