"""Gateway errors."""


class GatewayError(Exception):
    """Any failure talking to the election gateway."""

    def __init__(self, message: str = "Gateway error"):
        self.message = message
        super().__init__(self.message)


class NetworkUnavailable(GatewayError):
    """Device is offline or the gateway could not be reached."""

    def __init__(self, message: str = "Network unavailable"):
        super().__init__(message)


class GatewayHTTPError(GatewayError):
    """Gateway answered with a non-success HTTP status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"HTTP error: {status}")


class GatewayApplicationError(GatewayError):
    """Gateway rejected the request or returned a malformed payload."""

    def __init__(self, message: str = "Unknown gateway error"):
        super().__init__(message)
