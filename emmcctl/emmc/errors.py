"""Per-device analysis errors."""


class AnalysisError(Exception):
    """Analysis of one device failed; the session can carry on."""

    def __init__(self, device: str, message: str, detail: str = ""):
        super().__init__(message)
        self.device = device
        self.detail = detail


class DeviceNotFoundError(AnalysisError):
    """Device node disappeared between selection and analysis."""

    pass


class StatsError(AnalysisError):
    """I/O statistics or uptime could not be read."""

    pass


class RegisterReadError(AnalysisError):
    """Extended CSD register dump failed or was empty."""

    pass
