"""Shaft speed estimation from a quadrature encoder pulse count."""

from __future__ import annotations

from .moving_avg import SAMPLE_NUM, MovingAverage

PULSE_REVOLUTION_RATIO = 11
GEAR_RATIO = 4.4
SHAFT_REVOLUTION_RATIO = PULSE_REVOLUTION_RATIO * GEAR_RATIO

TIME_BASIS = 0.1

ENCODER_PERIOD_MS = 100


def _to_i16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def pulses_to_rpm(pulses: int) -> int:
    """Convert pulses counted over one time basis into output shaft RPM."""
    velocity = pulses / TIME_BASIS
    return int((velocity / SHAFT_REVOLUTION_RATIO) * 60)


class EncoderSpeed:
    """Turn successive absolute pulse counts into a filtered RPM value.

    The pulse difference is taken as a 16-bit signed value and its magnitude is
    smoothed by a moving average, so direction does not affect the result.
    """

    def __init__(self, window: int = SAMPLE_NUM) -> None:
        self.filter = MovingAverage(window)
        self._prev_count = 0
        self.rpm = 0

    def update(self, pulse_count: int) -> int:
        """Feed the latest pulse count and return the current RPM."""
        delta = _to_i16(pulse_count - self._prev_count)
        if delta < 0:
            delta = _to_i16(-delta)
        filtered = self.filter.apply(delta & 0xFFFFFFFF)
        self.rpm = pulses_to_rpm(filtered)
        self._prev_count = _to_i16(pulse_count)
        return self.rpm