# errors.py
from typing import Optional


class SignalBotError(Exception):
    """Base class for all bot errors."""


class UpstreamFetchError(SignalBotError):
    """
    A data-source call failed or returned unusable data.
    Aborts the current cycle; the next tick starts from scratch.
    """

    def __init__(self, source: str, instrument: str, message: str):
        self.source = source
        self.instrument = instrument
        super().__init__(f"{source} [{instrument}]: {message}")


class CycleTimeoutError(UpstreamFetchError):
    def __init__(self, instrument: str, timeout_sec: float):
        self.timeout_sec = timeout_sec
        super().__init__("cycle", instrument, f"fetches did not finish within {timeout_sec:g}s")


class InsufficientDataError(SignalBotError):
    def __init__(self, what: str, required: int, got: int):
        self.what = what
        self.required = required
        self.got = got
        super().__init__(f"{what}: need at least {required} points, got {got}")


class DegenerateVolatilityError(SignalBotError):
    def __init__(self, atr: Optional[float]):
        self.atr = atr
        super().__init__(f"ATR={atr!r} gives a zero stop distance, risk/reward is undefined")


class NotificationDeliveryError(SignalBotError):
    def __init__(self, channel: str, message: str):
        self.channel = channel
        super().__init__(f"{channel}: {message}")
