"""DC motor driven by a PWM output and two direction pins."""

from __future__ import annotations

import enum
from typing import Callable, Optional

PWM_FREQUENCY_HZ = 50_000
PWM_PERIOD_NS = 1_000_000_000 // PWM_FREQUENCY_HZ


class MotorError(RuntimeError):
    """Raised when the motor hardware rejects a command."""


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


PwmWriter = Callable[[int, int], None]
DirectionWriter = Callable[[Direction], None]


class Motor:
    """Motor state plus optional callbacks that drive the real outputs.

    ``pwm`` receives ``(period_ns, pulse_ns)``; ``pins`` receives the new
    direction. Either may raise to signal a hardware failure.
    """

    def __init__(
        self,
        pwm: Optional[PwmWriter] = None,
        pins: Optional[DirectionWriter] = None,
    ) -> None:
        self._pwm = pwm
        self._pins = pins
        self.direction: Optional[Direction] = None
        self.pulse_ns = 0
        self.initialized = False

    def init(self) -> None:
        """Set the default direction (backward) and stop the motor."""
        self.set_direction_backward()
        self.set_pulse_percent(0)
        self.initialized = True

    def _set_direction(self, direction: Direction) -> None:
        if self._pins is not None:
            try:
                self._pins(direction)
            except Exception as exc:
                raise MotorError(f"failed to set direction pins: {exc}") from exc
        self.direction = direction

    def set_direction_forward(self) -> None:
        self._set_direction(Direction.FORWARD)

    def set_direction_backward(self) -> None:
        self._set_direction(Direction.BACKWARD)

    def _write_pwm(self, pulse_ns: int) -> None:
        if self._pwm is not None:
            try:
                self._pwm(PWM_PERIOD_NS, pulse_ns)
            except Exception as exc:
                raise MotorError(f"failed to set pwm output: {exc}") from exc
        self.pulse_ns = pulse_ns

    def set_duty_period(self, period_ns: int) -> None:
        """Set the PWM pulse width in nanoseconds."""
        if not 0 <= period_ns <= PWM_PERIOD_NS:
            raise ValueError(f"pulse width must be within 0..{PWM_PERIOD_NS} ns")
        self._write_pwm(period_ns)

    def set_pulse_percent(self, percent: int) -> None:
        """Set the PWM duty cycle as a whole percentage."""
        if not 0 <= percent <= 100:
            raise ValueError("duty cycle must be within 0..100 percent")
        self._write_pwm(percent * PWM_PERIOD_NS // 100)