"""Errors raised while building a logger."""


class InvalidConfiguration(Exception):
    """Raised when the configured minimum severity is neither ``mute`` nor a known level."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"An invalid log level was given: {value}")
