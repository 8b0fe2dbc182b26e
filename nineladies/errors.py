"""Error taxonomy.

ConfigError is fatal to a run. ImageValidationError and BackendCallError are
per-item: the batch driver reports them and moves on to the next path.
"""


class NineLadiesError(Exception):
    pass


# ── configuration ─────────────────────────────────────────────────────────────


class ConfigError(NineLadiesError, ValueError):
    pass


class PromptReadError(ConfigError):
    pass


class PromptParseError(ConfigError):
    pass


class TemperatureRangeError(ConfigError):
    pass


class MissingModelError(ConfigError):
    pass


# ── image validation ──────────────────────────────────────────────────────────


class ImageValidationError(NineLadiesError):
    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class ImageNotFoundError(ImageValidationError):
    pass


class ImageReadError(ImageValidationError):
    pass


class UnrecognizedFormatError(ImageValidationError):
    pass


# ── backend calls ─────────────────────────────────────────────────────────────


class BackendCallError(NineLadiesError):
    pass


class TransportError(BackendCallError):
    pass


class HTTPStatusError(BackendCallError):
    def __init__(self, status_code: int, body: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class EnvelopeError(BackendCallError):
    pass
