"""Error kinds raised by the Azure OpenAI and SWE Agent clients.

Every failure is raised to the caller; nothing here retries. The FastAPI
server and the CLI translate these into HTTP statuses and exit codes.
"""

from typing import Sequence, Tuple


class BridgeError(Exception):
    """Base class for all integration failures."""


class ConfigurationError(BridgeError):
    def __init__(self, message: str, missing: Sequence[str] = ()):
        super().__init__(message)
        self.missing: Tuple[str, ...] = tuple(missing)


class InvalidEndpointError(ConfigurationError):
    """The endpoint is present but is not a usable URL."""


class RequestConstructionError(BridgeError):
    pass


class TransportError(BridgeError):
    """The peer could not be reached, or the call was timed out or cancelled."""


class DecodeError(BridgeError):
    pass


class UpstreamStatusError(BridgeError):
    def __init__(self, message: str, *, status_code: int, status: str, detail: str):
        super().__init__(message)
        self.status_code = status_code
        self.status = status
        self.detail = detail


class SemanticError(BridgeError):
    """A 2xx response that lacks the content we asked for."""


class NoCompletionError(SemanticError):
    pass


class EmptyCompletionError(SemanticError):
    pass
