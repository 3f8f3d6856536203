"""Simulated motor cruise control over CAN: PID speed loop, encoder filtering and operator interface."""

__version__ = "0.1.0"

__all__ = [
    "can_protocol",
    "controller",
    "encoder",
    "interface",
    "motor",
    "moving_avg",
    "pid",
    "serial_handler",
]