"""PID speed controller driving the motor PWM and reporting motor state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .can_protocol import MotorInfo
from .motor import PWM_PERIOD_NS, Motor

KP = 10.0
KI = 5.0
KD = 0.01

INTERVAL_PERIOD_S = 0.01

MAX_OUTPUT = PWM_PERIOD_NS
MIN_OUTPUT = 0

ERROR_TOLERANCE = 2

PID_PERIOD_MS = 10

_U16_MAX = 0xFFFF


@dataclass(frozen=True)
class PidOutput:
    """The controller's terms and result for one step."""

    error: int
    proportional: float
    integral: float
    derivative: float
    output: float
    saturation: bool
    info: MotorInfo


class PidController:
    """Discrete PID controller whose output is a PWM pulse width in nanoseconds.

    The integral is frozen while the output is saturated at its maximum or the
    error is within the tolerance, and cleared whenever the target is zero.
    """

    def __init__(
        self,
        motor: Optional[Motor] = None,
        kp: float = KP,
        ki: float = KI,
        kd: float = KD,
        interval: float = INTERVAL_PERIOD_S,
    ) -> None:
        self.motor = motor
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.interval = interval
        self.target = 0
        self.rpm = 0
        self.integral = 0.0
        self.prev_error = 0
        self.saturation = False

    def set_target(self, target: int) -> None:
        """Set the target speed in RPM."""
        if not 0 <= target <= _U16_MAX:
            raise ValueError(f"target must fit in 16 bits, got {target}")
        self.target = target

    def set_current_rpm(self, rpm: int) -> None:
        """Record the latest measured speed in RPM."""
        self.rpm = int(rpm)

    def step(self) -> PidOutput:
        """Run one control period, drive the motor and return the result."""
        error = self.target - self.rpm

        if error == 0 and self.target == 0:
            self.integral = 0.0
        elif self.target == 0:
            self.integral = 0.0
        elif abs(error) > ERROR_TOLERANCE and not self.saturation:
            self.integral += error * self.interval

        proportional = self.kp * error
        derivative = (error - self.prev_error) / self.interval
        output = proportional + self.ki * self.integral + self.kd * derivative

        if output >= MAX_OUTPUT:
            output = float(MAX_OUTPUT)
            self.saturation = True
        elif output <= MIN_OUTPUT:
            output = float(MIN_OUTPUT)
        else:
            self.saturation = False

        if self.motor is not None:
            self.motor.set_duty_period(int(output))
        self.prev_error = error

        info = MotorInfo(
            rpm=self.rpm & _U16_MAX,
            target=self.target & _U16_MAX,
            error_abs=abs(error) & _U16_MAX,
        )
        return PidOutput(
            error=error,
            proportional=proportional,
            integral=self.integral,
            derivative=derivative,
            output=output,
            saturation=self.saturation,
            info=info,
        )