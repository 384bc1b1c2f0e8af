"""
Formatting utilities for display.

Used by the API summaries and the CLI.
"""


def format_distance(distance_m: float) -> str:
    """
    Format a distance given in meters.

    Args:
        distance_m: Distance in meters

    Returns:
        Formatted string (e.g., '850 m' or '12.35 km')
    """
    if distance_m < 1000:
        return f"{round(distance_m)} m"
    return f"{distance_m / 1000:.2f} km"


def format_duration(duration_s: float) -> str:
    """
    Format a duration given in seconds.

    Args:
        duration_s: Duration in seconds

    Returns:
        Formatted string (e.g., '2h 5min' or '45min')
    """
    total = int(duration_s)
    hours = total // 3600
    minutes = (total % 3600) // 60

    if hours > 0:
        return f"{hours}h {minutes}min"
    return f"{minutes}min"


def format_coordinates(lat: float, lng: float, precision: int = 6) -> str:
    """Format a point as 'lat, lng' with fixed precision."""
    return f"{lat:.{precision}f}, {lng:.{precision}f}"


def format_elevation(meters: float) -> str:
    """
    Format elevation change with sign.

    Args:
        meters: Elevation in meters

    Returns:
        Formatted string (e.g., '+850 m')
    """
    if meters >= 0:
        return f"+{int(meters)} m"
    return f"{int(meters)} m"
