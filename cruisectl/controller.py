"""Cruise control node: ties CAN input, encoder speed and PID control together."""

from __future__ import annotations

from collections import deque
from typing import Generic, Optional, TypeVar

from .can_protocol import (
    TARGET_CONTROL_ID,
    CanError,
    CanFrame,
    LoopbackBus,
    MotorInfo,
    decode_target_frame,
    encode_motor_info_frame,
)
from .encoder import EncoderSpeed
from .motor import Motor
from .pid import PidController

QUEUE_DEPTH = 3
POLL_PERIOD_MS = 5

_EXACT_ID_MASK = 0x7FF

T = TypeVar("T")


class _MessageQueue(Generic[T]):
    """Bounded FIFO that drops new messages when full."""

    def __init__(self, depth: int) -> None:
        self._depth = depth
        self._items: deque[T] = deque()

    def put(self, item: T) -> bool:
        if len(self._items) >= self._depth:
            return False
        self._items.append(item)
        return True

    def get(self) -> Optional[T]:
        return self._items.popleft() if self._items else None

    def __len__(self) -> int:
        return len(self._items)


class CruiseControlNode:
    """Receives target speeds over CAN, regulates the motor and reports its state."""

    def __init__(
        self,
        bus: Optional[LoopbackBus] = None,
        motor: Optional[Motor] = None,
        queue_depth: int = QUEUE_DEPTH,
    ) -> None:
        self.bus = bus if bus is not None else LoopbackBus()
        self.motor = motor if motor is not None else Motor()
        self.motor.init()
        self.encoder = EncoderSpeed()
        self.pid = PidController(self.motor)
        self._rx_queue: _MessageQueue[int] = _MessageQueue(queue_depth)
        self._rpm_queue: _MessageQueue[int] = _MessageQueue(queue_depth)
        self._tx_queue: _MessageQueue[MotorInfo] = _MessageQueue(queue_depth)
        if not self.bus.started:
            self.bus.start()
        self.bus.add_rx_filter(TARGET_CONTROL_ID, _EXACT_ID_MASK, self.handle_frame)

    def handle_frame(self, frame: CanFrame) -> bool:
        """Queue the target carried by a received frame; False if the queue is full."""
        return self._rx_queue.put(decode_target_frame(frame))

    def submit_pulse_count(self, pulse_count: int) -> int:
        """Update the speed estimate from an encoder reading and queue it."""
        rpm = self.encoder.update(pulse_count)
        self._rpm_queue.put(rpm)
        return rpm

    def poll(self) -> Optional[CanFrame]:
        """Run one loop iteration and return the motor info frame sent, if any."""
        target = self._rx_queue.get()
        if target is not None:
            self.pid.set_target(target)
        rpm = self._rpm_queue.get()
        if rpm is not None:
            self.pid.set_current_rpm(rpm)

        self._tx_queue.put(self.pid.step().info)

        info = self._tx_queue.get()
        if info is None:
            return None
        frame = encode_motor_info_frame(info)
        try:
            self.bus.send(frame)
        except CanError:
            return None
        return frame