import pytest

from cruisectl.can_protocol import MotorInfo
from cruisectl.motor import Motor
from cruisectl.pid import ERROR_TOLERANCE, MAX_OUTPUT, MIN_OUTPUT, PidController


def test_idle_controller_outputs_zero():
    pid = PidController()
    result = pid.step()
    assert result.output == 0
    assert result.integral == 0
    assert result.info == MotorInfo(rpm=0, target=0, error_abs=0)


def test_first_step_worked_example():
    pid = PidController()
    pid.set_target(100)
    result = pid.step()
    assert result.error == 100
    assert result.integral == pytest.approx(1.0)
    assert result.output == pytest.approx(1105.0)
    assert result.saturation is False


def test_output_saturates_at_maximum_and_freezes_integral():
    pid = PidController()
    pid.set_target(60000)
    first = pid.step()
    assert first.output == MAX_OUTPUT
    assert first.saturation is True
    second = pid.step()
    assert second.integral == first.integral
    assert second.output == MAX_OUTPUT


def test_negative_output_clamped_to_minimum():
    pid = PidController()
    pid.set_target(10)
    pid.set_current_rpm(500)
    result = pid.step()
    assert result.output == MIN_OUTPUT
    assert result.info.error_abs == 490


def test_zero_target_clears_integral():
    pid = PidController()
    pid.set_target(100)
    pid.step()
    assert pid.integral > 0
    pid.set_target(0)
    pid.set_current_rpm(50)
    result = pid.step()
    assert result.integral == 0
    assert result.output == MIN_OUTPUT


def test_small_error_does_not_integrate():
    pid = PidController()
    pid.set_target(100)
    pid.set_current_rpm(100 - ERROR_TOLERANCE)
    result = pid.step()
    assert result.integral == 0


def test_info_reports_rpm_and_target():
    pid = PidController()
    pid.set_target(300)
    pid.set_current_rpm(250)
    info = pid.step().info
    assert info == MotorInfo(rpm=250, target=300, error_abs=50)


def test_motor_receives_truncated_output():
    motor = Motor()
    pid = PidController(motor)
    pid.set_target(100)
    result = pid.step()
    assert motor.pulse_ns == int(result.output)


def test_derivative_uses_previous_error():
    pid = PidController()
    pid.set_target(100)
    pid.step()
    pid.set_current_rpm(100)
    result = pid.step()
    assert result.error == 0
    assert result.derivative < 0


@pytest.mark.parametrize("target", [-1, 0x10000])
def test_target_out_of_range(target):
    with pytest.raises(ValueError):
        PidController().set_target(target)