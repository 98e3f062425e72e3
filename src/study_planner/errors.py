"""Error taxonomy for the remote/local resolution pipeline."""


class PlannerError(Exception):
    """Base class for failures a resolution strategy may report."""

    reason = "error"


class ConfigurationError(PlannerError, RuntimeError):
    """Remote credential is missing; raised before any network attempt."""

    reason = "configuration"


class RemoteUnavailable(PlannerError):
    """Transport failure, non-2xx status or unreadable response envelope."""

    reason = "remote_unavailable"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(PlannerError):
    """The remote answered, but not with a usable JSON object."""

    reason = "malformed_response"
