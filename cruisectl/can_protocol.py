"""CAN frame layouts exchanged between the interface and cruise control nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

TARGET_CONTROL_ID = 0x123
MOTOR_INFO_ID = 0x543

TARGET_FRAME_DLC = 2
MOTOR_INFO_FRAME_DLC = 6

_MAX_STANDARD_ID = 0x7FF
_MAX_DLC = 8
_U16_MAX = 0xFFFF


class CanError(Exception):
    """Raised when the CAN bus refuses an operation."""


def _check_u16(name: str, value: int) -> int:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must fit in 16 bits, got {value}")
    return value


@dataclass(frozen=True)
class CanFrame:
    """A classic CAN frame with a standard identifier."""

    id: int
    data: bytes = field(default=b"")

    def __post_init__(self) -> None:
        if not 0 <= self.id <= _MAX_STANDARD_ID:
            raise ValueError(f"invalid standard CAN id {self.id:#x}")
        data = bytes(self.data)
        if len(data) > _MAX_DLC:
            raise ValueError(f"CAN frame data too long: {len(data)} bytes")
        object.__setattr__(self, "data", data)

    @property
    def dlc(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class MotorInfo:
    """Motor state reported by the cruise control node."""

    rpm: int
    target: int
    error_abs: int

    def __post_init__(self) -> None:
        _check_u16("rpm", self.rpm)
        _check_u16("target", self.target)
        _check_u16("error_abs", self.error_abs)


def _u16(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + 2], "big")


def encode_target_frame(target: int) -> CanFrame:
    """Build the frame carrying a target RPM."""
    _check_u16("target", target)
    return CanFrame(TARGET_CONTROL_ID, target.to_bytes(2, "big"))


def decode_target_frame(frame: CanFrame) -> int:
    """Extract the target RPM from a target control frame."""
    if frame.dlc < TARGET_FRAME_DLC:
        raise ValueError(f"target frame needs {TARGET_FRAME_DLC} bytes, got {frame.dlc}")
    return _u16(frame.data, 0)


def encode_motor_info_frame(info: MotorInfo) -> CanFrame:
    """Build the frame carrying rpm, target and absolute error."""
    payload = b"".join(
        value.to_bytes(2, "big") for value in (info.rpm, info.target, info.error_abs)
    )
    return CanFrame(MOTOR_INFO_ID, payload)


def decode_motor_info_frame(frame: CanFrame) -> MotorInfo:
    """Extract motor state from a motor info frame."""
    if frame.dlc < MOTOR_INFO_FRAME_DLC:
        raise ValueError(
            f"motor info frame needs {MOTOR_INFO_FRAME_DLC} bytes, got {frame.dlc}"
        )
    return MotorInfo(
        rpm=_u16(frame.data, 0),
        target=_u16(frame.data, 2),
        error_abs=_u16(frame.data, 4),
    )


def format_motor_info(frame: CanFrame) -> str:
    """Render a received motor info frame as the interface node reports it."""
    info = decode_motor_info_frame(frame)
    return (
        f"\nFRAME ID: [{frame.id}]\n"
        f"FRAME DLC: [{frame.dlc}]\n"
        f"RPM: [{info.rpm}] - Target: [{info.target}] - Error: [{info.error_abs}]\n"
    )


RxCallback = Callable[[CanFrame], None]


class LoopbackBus:
    """In-process CAN bus delivering every sent frame to matching receive filters."""

    def __init__(self) -> None:
        self.started = False
        self.sent: list[CanFrame] = []
        self._filters: dict[int, tuple[int, int, RxCallback]] = {}
        self._next_filter_id = 0

    def start(self) -> None:
        """Start the bus; sending before this fails."""
        if self.started:
            raise CanError("CAN bus already started")
        self.started = True

    def add_rx_filter(self, can_id: int, mask: int, callback: RxCallback) -> int:
        """Register ``callback`` for frames whose id matches ``can_id`` under ``mask``."""
        filter_id = self._next_filter_id
        self._next_filter_id += 1
        self._filters[filter_id] = (can_id, mask, callback)
        return filter_id

    def send(self, frame: CanFrame) -> None:
        """Transmit a frame to every matching filter."""
        if not self.started:
            raise CanError("CAN bus is not started")
        self.sent.append(frame)
        for can_id, mask, callback in list(self._filters.values()):
            if (frame.id & mask) == (can_id & mask):
                callback(frame)