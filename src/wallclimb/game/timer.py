"""Per-turn countdown."""


class TimerController:
    """Countdown budget for a single turn.

    ``time_left`` may go negative in storage; everything that reads it for
    display goes through ``display``/``fraction``, which clamp at zero.
    """

    def __init__(self, max_time_ms: float = 3000.0):
        if max_time_ms <= 0:
            raise ValueError("max_time_ms must be positive")
        self.max_time_ms = max_time_ms
        self.time_left = max_time_ms

    def reset(self) -> None:
        self.time_left = self.max_time_ms

    def tick(self, dt: float) -> bool:
        """Consume ``dt`` ms. Returns True once the countdown has expired."""
        self.time_left -= dt
        return self.time_left <= 0

    @property
    def expired(self) -> bool:
        return self.time_left <= 0

    @property
    def display(self) -> float:
        return max(0.0, self.time_left)

    @property
    def fraction(self) -> float:
        return min(1.0, self.display / self.max_time_ms)
