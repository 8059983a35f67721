from dataclasses import dataclass

from taskfan.executor.remote import (
    DEFAULT_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    MIN_SETTLE_SECONDS,
)


@dataclass(frozen=True)
class RunSettings:
    endpoint: str = DEFAULT_ENDPOINT
    settle_seconds: float = MIN_SETTLE_SECONDS
    timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS
    # None keeps every task running at once.
    max_workers: int | None = None


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
