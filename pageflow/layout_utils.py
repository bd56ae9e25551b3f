"""
Layout math helpers for ReportLab measurement.
"""

from __future__ import annotations

from typing import Sequence

from reportlab.platypus import Flowable, KeepTogether


def measure_height(flowable: Flowable, width: float) -> float:
    """Return the wrapped height for a flowable at the given width."""

    if isinstance(flowable, KeepTogether):
        content = getattr(flowable, "_content", [])
        return sum(measure_height(child, width) for child in content)
    _, height = flowable.wrap(width, 10_000)
    return height


def flowables_height(*, flowables: Sequence[Flowable], width: float) -> float:
    """Return total height for a stack of flowables.

    Args:
        flowables: Flowables to measure.
        width: Available width for wrapping.
    Returns:
        Total height including space before/after.
    """

    total = 0.0
    for flowable in flowables:
        total += flowable.getSpaceBefore()
        total += measure_height(flowable=flowable, width=width)
        total += flowable.getSpaceAfter()
    return total
