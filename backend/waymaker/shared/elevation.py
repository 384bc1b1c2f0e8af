"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
import bisect
import math
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def downsample(items: Sequence[T], max_points: int) -> List[T]:
    """
    Reduce a sequence to about `max_points` items with a fixed stride.

    Stride is ceil(len / max_points). The first item is always kept and
    the true last item is appended when the stride skipped it.

    Args:
        items: Points to reduce
        max_points: Cap above which the sequence is reduced

    Returns:
        New list (the input is never modified)
    """
    if len(items) <= max_points:
        return list(items)

    step = math.ceil(len(items) / max_points)
    sampled = [item for i, item in enumerate(items) if i % step == 0]

    if (len(items) - 1) % step != 0:
        sampled.append(items[-1])

    return sampled


def calculate_elevation_changes(
    elevations: Sequence[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Unknown (None) samples are skipped. Values are not rounded.

    Args:
        elevations: List of elevation values

    Returns:
        Tuple of (gain_m, loss_m)

    Example:
        >>> calculate_elevation_changes([100, 150, 120, 80])
        (50.0, 70.0)
    """
    gain = 0.0
    loss = 0.0
    previous: Optional[float] = None

    for elevation in elevations:
        if elevation is None:
            continue
        if previous is not None:
            diff = elevation - previous
            if diff > 0:
                gain += diff
            else:
                loss += abs(diff)
        previous = elevation

    return gain, loss


def rounded_elevation_changes(
    elevations: Sequence[Optional[float]]
) -> Tuple[int, int]:
    """Gain and loss rounded to whole meters, on the aggregate only."""
    gain, loss = calculate_elevation_changes(elevations)
    return int(round(gain)), int(round(loss))


def interpolate_elevations(
    targets: Sequence[float],
    distances: Sequence[float],
    elevations: Sequence[Optional[float]]
) -> List[Optional[float]]:
    """
    Linearly interpolate elevations at target distances.

    Args:
        targets: Distances (km) where elevation is wanted
        distances: Non-decreasing sample distances (km)
        elevations: Elevation at each sample (None samples are ignored)

    Returns:
        One elevation per target; None when there are no usable samples.
        Targets outside the sampled range take the nearest end value.
    """
    known = [(d, e) for d, e in zip(distances, elevations) if e is not None]
    if not known:
        return [None] * len(targets)

    xs = [d for d, _ in known]
    ys = [e for _, e in known]
    result: List[Optional[float]] = []

    for target in targets:
        if target <= xs[0]:
            result.append(ys[0])
            continue
        if target >= xs[-1]:
            result.append(ys[-1])
            continue

        i = bisect.bisect_right(xs, target)
        x0, x1 = xs[i - 1], xs[i]
        y0, y1 = ys[i - 1], ys[i]
        if x1 == x0:
            result.append(y1)
        else:
            result.append(y0 + (y1 - y0) * (target - x0) / (x1 - x0))

    return result


def elevation_range(
    elevations: Sequence[Optional[float]]
) -> Optional[Tuple[float, float]]:
    """(min, max) of the known elevations, or None if none are known."""
    known = [e for e in elevations if e is not None]
    if not known:
        return None
    return min(known), max(known)
