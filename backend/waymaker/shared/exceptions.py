"""
Error taxonomy.

Every failure is local to one operation and surfaces as one of these.
Remote failures are classified by HTTP status so callers can show a
precise message without parsing strings.
"""

from typing import Optional

import httpx


class WaymakerError(Exception):
    """Base error."""
    pass


class InsufficientWaypointsError(WaymakerError):
    """Fewer than 2 usable waypoints or coordinates."""

    def __init__(self, message: str = "At least 2 points are required to build a stage"):
        super().__init__(message)


class GPXParseError(WaymakerError):
    """GPX document is not well-formed or is not GPX."""
    pass


class UnknownTransportModeError(WaymakerError):
    """Travel mode not offered by the planner."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"Unknown transport mode: {mode}")


# =============================================================================
# Remote services
# =============================================================================

class RemoteServiceError(WaymakerError):
    """Remote service failure not covered by a more precise class."""

    default_message = "Remote error"

    def __init__(
        self,
        service: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        self.service = service
        self.detail = detail
        self.status_code = status_code
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        if self.detail:
            return f"{self.default_message}: {self.detail}"
        return self.default_message


class ServiceAuthError(RemoteServiceError):
    """API key missing or invalid (401)."""
    default_message = "Invalid API key for the remote service. Check your configuration."

    @property
    def user_message(self) -> str:
        return self.default_message


class ServiceQuotaError(RemoteServiceError):
    """Quota exceeded or access denied (403, 429)."""
    default_message = "API quota exceeded or access denied."

    @property
    def user_message(self) -> str:
        return self.default_message


class ServiceBadRequestError(RemoteServiceError):
    """Malformed request (400)."""
    default_message = "Invalid request parameters. Check the coordinates."

    @property
    def user_message(self) -> str:
        return self.default_message


class NoRouteFoundError(RemoteServiceError):
    """No route between the requested points (404 or empty response)."""
    default_message = "Unable to compute a route between these points."

    @property
    def user_message(self) -> str:
        return self.default_message


class ServiceNetworkError(RemoteServiceError):
    """Service unreachable (connection error or timeout)."""
    default_message = "Network problem. Check your internet connection."

    @property
    def user_message(self) -> str:
        return self.default_message


STATUS_ERRORS = {
    400: ServiceBadRequestError,
    401: ServiceAuthError,
    403: ServiceQuotaError,
    404: NoRouteFoundError,
    429: ServiceQuotaError,
}


def error_from_response(service: str, response: httpx.Response) -> RemoteServiceError:
    """Map a failed HTTP response to the matching error class."""
    error_cls = STATUS_ERRORS.get(response.status_code, RemoteServiceError)
    detail = response.text[:200] if response.text else f"HTTP {response.status_code}"
    return error_cls(service, detail=detail, status_code=response.status_code)


def error_from_transport(service: str, exc: httpx.HTTPError) -> RemoteServiceError:
    """Map an httpx transport exception to the matching error class."""
    if isinstance(exc, (httpx.TimeoutException, httpx.NetworkError)):
        return ServiceNetworkError(service, detail=str(exc))
    return RemoteServiceError(service, detail=str(exc) or exc.__class__.__name__)
