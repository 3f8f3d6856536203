import pytest

from cruisectl.can_protocol import (
    MOTOR_INFO_ID,
    TARGET_CONTROL_ID,
    CanError,
    CanFrame,
    LoopbackBus,
    MotorInfo,
    decode_motor_info_frame,
    decode_target_frame,
    encode_motor_info_frame,
    encode_target_frame,
    format_motor_info,
)


def test_target_frame_wire_layout():
    frame = encode_target_frame(0x1234)
    assert frame.id == 0x123
    assert frame.dlc == 2
    assert frame.data == b"\x12\x34"


@pytest.mark.parametrize("target", [0, 1, 255, 256, 3000, 0xFFFF])
def test_target_round_trip(target):
    assert decode_target_frame(encode_target_frame(target)) == target


@pytest.mark.parametrize("target", [-1, 0x10000])
def test_target_out_of_range(target):
    with pytest.raises(ValueError):
        encode_target_frame(target)


def test_motor_info_wire_layout():
    frame = encode_motor_info_frame(MotorInfo(rpm=0x0102, target=0x0304, error_abs=0x0506))
    assert frame.id == 0x543
    assert frame.dlc == 6
    assert frame.data == b"\x01\x02\x03\x04\x05\x06"


def test_motor_info_round_trip():
    info = MotorInfo(rpm=1200, target=1500, error_abs=300)
    assert decode_motor_info_frame(encode_motor_info_frame(info)) == info


def test_motor_info_rejects_out_of_range():
    with pytest.raises(ValueError):
        MotorInfo(rpm=0x10000, target=0, error_abs=0)


def test_short_frames_rejected():
    with pytest.raises(ValueError):
        decode_target_frame(CanFrame(TARGET_CONTROL_ID, b"\x01"))
    with pytest.raises(ValueError):
        decode_motor_info_frame(CanFrame(MOTOR_INFO_ID, b"\x01\x02\x03"))


def test_can_frame_validation():
    with pytest.raises(ValueError):
        CanFrame(TARGET_CONTROL_ID, bytes(9))
    with pytest.raises(ValueError):
        CanFrame(0x800, b"")


def test_format_motor_info():
    frame = encode_motor_info_frame(MotorInfo(rpm=10, target=20, error_abs=30))
    text = format_motor_info(frame)
    assert f"FRAME ID: [{MOTOR_INFO_ID}]" in text
    assert "FRAME DLC: [6]" in text
    assert text.endswith("RPM: [10] - Target: [20] - Error: [30]\n")


def test_send_before_start_fails():
    bus = LoopbackBus()
    with pytest.raises(CanError):
        bus.send(encode_target_frame(5))


def test_double_start_fails():
    bus = LoopbackBus()
    bus.start()
    with pytest.raises(CanError):
        bus.start()


def test_zero_mask_receives_everything():
    bus = LoopbackBus()
    received = []
    bus.add_rx_filter(TARGET_CONTROL_ID, 0, received.append)
    bus.start()
    frames = [encode_target_frame(9), encode_motor_info_frame(MotorInfo(1, 2, 3))]
    for frame in frames:
        bus.send(frame)
    assert received == frames
    assert bus.sent == frames


def test_exact_mask_filters_by_id():
    bus = LoopbackBus()
    received = []
    bus.add_rx_filter(MOTOR_INFO_ID, 0x7FF, received.append)
    bus.start()
    bus.send(encode_target_frame(9))
    info_frame = encode_motor_info_frame(MotorInfo(4, 5, 6))
    bus.send(info_frame)
    assert received == [info_frame]


def test_filter_ids_are_distinct():
    bus = LoopbackBus()
    first = bus.add_rx_filter(TARGET_CONTROL_ID, 0, lambda frame: None)
    second = bus.add_rx_filter(MOTOR_INFO_ID, 0, lambda frame: None)
    assert first >= 0 and second >= 0
    assert first != second