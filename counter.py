from __future__ import annotations

from hanoi_moves import InvalidArgument


def check_integer(value, what: str = "value") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} must be an integer, got {value!r}")
    return value


class BoundedCounter:
    """
    Integer counter clamped to the inclusive range [minimum, maximum].

    Stepping past a bound is a no-op and ``set_to`` clamps, so callers can
    feed it imprecise input (a slider, a held key) without checking first.
    """

    def __init__(self, minimum: int, maximum: int, value: int):
        check_integer(minimum, "minimum")
        check_integer(maximum, "maximum")
        check_integer(value)
        if minimum > maximum:
            raise InvalidArgument(f"minimum {minimum} is above maximum {maximum}")
        self.minimum = minimum
        self.maximum = maximum
        self._value = self._clamp(value)

    def __repr__(self):
        return f"BoundedCounter({self.minimum}, {self.maximum}, {self._value})"

    def _clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))

    @property
    def value(self) -> int:
        return self._value

    @property
    def can_increment(self) -> bool:
        return self._value < self.maximum

    @property
    def can_decrement(self) -> bool:
        return self.minimum < self._value

    def increment(self):
        if self.can_increment:
            self._value += 1

    def decrement(self):
        if self.can_decrement:
            self._value -= 1

    def set_to(self, value: int):
        self._value = self._clamp(check_integer(value))
