import pytest

from cruisectl.can_protocol import (
    CanError,
    CanFrame,
    LoopbackBus,
    MotorInfo,
    encode_motor_info_frame,
    encode_target_frame,
    format_motor_info,
)
from cruisectl.interface import InterfaceNode, main


def _node(bus=None):
    written = []
    return InterfaceNode(bus, write=written.append), written


def test_serial_line_sends_target_frame():
    node, _ = _node()
    assert node.feed_serial(b"250\n") == [250]
    assert node.bus.sent == [encode_target_frame(250)]


def test_negative_target_uses_magnitude():
    node, _ = _node()
    assert node.feed_serial(b"-42\r") == [42]
    assert node.bus.sent[-1].data == b"\x00\x2a"


def test_partial_line_sends_nothing_until_terminated():
    node, _ = _node()
    assert node.feed_serial(b"12") == []
    assert node.feed_serial(b"3\n") == [123]


def test_received_motor_info_is_written():
    node, written = _node()
    frame = encode_motor_info_frame(MotorInfo(rpm=1, target=2, error_abs=1))
    node.bus.send(frame)
    assert written == [format_motor_info(frame)]


def test_short_motor_frame_rejected():
    node, _ = _node()
    with pytest.raises(ValueError):
        node.handle_frame(CanFrame(0x543, b"\x00\x01"))


def test_send_failure_is_reported():
    class FailingBus(LoopbackBus):
        def send(self, frame):
            raise CanError("bus off")

    node, written = _node(FailingBus())
    assert node.handle_line("77") is None
    assert written and written[0].startswith("Sending failed")


def test_main_round_trip(tmp_path, capsys):
    path = tmp_path / "targets.txt"
    path.write_bytes(b"120\n")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "Target: [120]" in out
    assert "Error: [120]" in out


def test_main_rejects_negative_steps(tmp_path):
    path = tmp_path / "targets.txt"
    path.write_bytes(b"1\n")
    with pytest.raises(SystemExit):
        main([str(path), "--steps", "-1"])