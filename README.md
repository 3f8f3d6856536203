# cruisectl

A motor cruise-control system made of two nodes that talk over a CAN bus:

* **Controller node** (`cruisectl.controller.CruiseControlNode`). It takes
  encoder pulse counts, smooths the difference between readings with a
  10-sample moving average and converts it to shaft RPM. A PID loop drives
  the motor's PWM output, and the node reports its state back on the bus.
* **Interface node** (`cruisectl.interface.InterfaceNode`). It reads target
  speeds from serial input, sends them to the controller as CAN frames, and
  prints the motor reports it receives.

`LoopbackBus` is an in-process CAN bus, so both nodes can run together for
simulation and testing.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## The CAN protocol

| Frame      | ID      | Length | Payload (big-endian, 16-bit each) |
|------------|---------|--------|-----------------------------------|
| Target     | `0x123` | 2      | target RPM                        |
| Motor info | `0x543` | 6      | RPM, target, absolute error       |

`cruisectl.can_protocol` builds and reads these frames:

* `encode_target_frame(target)` and `decode_target_frame(frame)`
* `encode_motor_info_frame(info)` and `decode_motor_info_frame(frame)`, which
  work on a `MotorInfo` (`rpm`, `target`, `error_abs`)
* `format_motor_info(frame)`, which returns the text the interface node
  prints for a received report

Frames are immutable `CanFrame(id, data)` objects with a standard 11-bit id
and at most 8 data bytes; `dlc` is the data length. Values that do not fit
in 16 bits, and frames that are too short to decode, raise `ValueError`.

`LoopbackBus` follows the steps of a real controller. Call `start()`, then
register receivers with `add_rx_filter(can_id, mask, callback)`, which
returns a filter number. `send(frame)` records the frame in `sent` and
passes it to every receiver whose id matches under its mask. Sending before
`start()`, or starting twice, raises `CanError`.

## Building blocks

* `cruisectl.moving_avg.MovingAverage(size=10)` averages the last `size`
  samples with integer division. `apply(sample)` adds a non-negative sample
  and returns the filtered value; `reset()` clears the window.
* `cruisectl.encoder.pulses_to_rpm(pulses)` converts pulses counted over
  0.1 s into output-shaft RPM (11 pulses per motor turn, 4.4:1 gearing).
  `EncoderSpeed.update(pulse_count)` takes successive raw counter readings,
  filters the magnitude of the 16-bit difference between them, and returns
  the current speed.
* `cruisectl.pid.PidController(motor=None)` is the speed loop. Set the
  set-point with `set_target(target)` and the measured speed with
  `set_current_rpm(rpm)`. Each `step()` runs one 10 ms iteration, writes the
  output as a pulse width to the motor if one is given, and returns a
  `PidOutput` holding the terms, the output and a `MotorInfo`. The output is
  clamped to the PWM period (20,000 ns). The integral is held while the
  output is saturated or the error is within 2 RPM, and cleared when the
  target is zero.
* `cruisectl.motor.Motor(pwm=None, pins=None)` is the PWM and direction-pin
  motor driver. The optional callbacks receive `(period_ns, pulse_ns)` and a
  `Direction` respectively. Its methods are `init()`,
  `set_direction_forward()`, `set_direction_backward()`,
  `set_duty_period(period_ns)` and `set_pulse_percent(percent)`. Values out
  of range raise `ValueError`; a callback that raises is reported as
  `MotorError`.
* `cruisectl.serial_handler.LineAssembler.feed(data)` collects serial bytes
  into lines ended by CR or LF and returns the completed lines (at most 49
  bytes are held, and each line is cut to 32 characters).
  `parse_target(line)` reads a leading integer the way `atoi` does and
  returns its magnitude as a 16-bit value.

## The nodes

`CruiseControlNode(bus=None, motor=None)` registers for target frames on the
bus. `handle_frame(frame)` queues a received target, returning `False` when
the queue (3 entries) is full. `submit_pulse_count(pulse_count)` updates and
queues the speed estimate. `poll()` runs the main loop once: it applies any
queued target and speed, steps the PID loop, and sends a motor info frame,
which it returns (or `None` if sending failed).

`InterfaceNode(bus=None, write=...)` registers for motor info frames.
`feed_serial(data)` takes raw serial bytes and returns the targets sent for
completed lines; `handle_line(line)` sends the target from a single line.
`handle_frame(frame)` writes and returns the report for a received frame.

## Command line

```
cruisectl-interface [INPUT] [--steps N]
```

This links an interface node and a controller node on one `LoopbackBus`. It
reads all target lines from `INPUT`, or from standard input when no file is
given, then sends each target and runs the controller loop `N` times
(default 1) after each one. Every motor report the interface receives is
printed.

## What it does not do

The package has no drivers: it does not open a real CAN interface or serial
port, read an encoder, or drive PWM and GPIO pins. Encoder readings must be
passed in with `submit_pulse_count`, and motor outputs are reached only
through the callbacks given to `Motor`. The nodes do not run their own
threads or timers; the caller decides when to call `poll()`.