"""Interface node: reads target speeds from a serial console and sends them over CAN."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional

from .can_protocol import (
    MOTOR_INFO_ID,
    CanError,
    CanFrame,
    LoopbackBus,
    encode_target_frame,
    format_motor_info,
)
from .serial_handler import LineAssembler, parse_target

_EXACT_ID_MASK = 0x7FF


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)


class InterfaceNode:
    """Turns serial input into target frames and prints received motor info."""

    def __init__(
        self,
        bus: Optional[LoopbackBus] = None,
        write: Callable[[str], None] = _stdout_write,
    ) -> None:
        self.bus = bus if bus is not None else LoopbackBus()
        self._write = write
        self._assembler = LineAssembler()
        if not self.bus.started:
            self.bus.start()
        self.bus.add_rx_filter(MOTOR_INFO_ID, _EXACT_ID_MASK, self.handle_frame)

    def feed_serial(self, data: bytes) -> list[int]:
        """Consume serial bytes and return the targets sent for completed lines."""
        sent = []
        for line in self._assembler.feed(data):
            target = self.handle_line(line)
            if target is not None:
                sent.append(target)
        return sent

    def handle_line(self, line: str) -> Optional[int]:
        """Send the target in ``line``; return it, or None if sending failed."""
        target = parse_target(line)
        try:
            self.bus.send(encode_target_frame(target))
        except CanError as exc:
            self._write(f"Sending failed [{exc}]")
            return None
        return target

    def handle_frame(self, frame: CanFrame) -> str:
        """Report a received motor info frame and return the text written."""
        text = format_motor_info(frame)
        self._write(text)
        return text


def main(argv: Optional[list[str]] = None) -> int:
    """Feed serial input to an interface node linked to a cruise control node."""
    from .controller import CruiseControlNode

    parser = argparse.ArgumentParser(
        prog="cruisectl",
        description="Send target speeds to a simulated cruise control node.",
    )
    parser.add_argument("input", nargs="?", help="file with target lines (default: stdin)")
    parser.add_argument(
        "--steps", type=int, default=1, help="control loop iterations per target line"
    )
    args = parser.parse_args(argv)
    if args.steps < 0:
        parser.error("--steps must not be negative")

    bus = LoopbackBus()
    interface = InterfaceNode(bus)
    controller = CruiseControlNode(bus)
    print("Serial started")

    if args.input is None:
        data = sys.stdin.buffer.read()
    else:
        with open(args.input, "rb") as handle:
            data = handle.read()

    assembler = LineAssembler()
    for line in assembler.feed(data):
        interface.handle_line(line)
        for _ in range(args.steps):
            controller.poll()
    return 0