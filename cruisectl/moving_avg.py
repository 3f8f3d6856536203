"""Fixed-window moving average filter over unsigned 32-bit samples."""

from __future__ import annotations

SAMPLE_NUM = 10
_U32_MASK = 0xFFFFFFFF


class MovingAverage:
    """Moving average over the last ``size`` samples, using integer division."""

    def __init__(self, size: int = SAMPLE_NUM) -> None:
        if size <= 0:
            raise ValueError("window size must be positive")
        self.size = size
        self.reset()

    def reset(self) -> None:
        """Clear the window and the running sum."""
        self._buffer = [0] * self.size
        self._position = 0
        self._sum = 0
        self.sample = 0
        self.filtered_value = 0

    def apply(self, sample: int) -> int:
        """Push a sample into the window and return the new filtered value."""
        if sample < 0:
            raise ValueError("samples must be non-negative")
        sample &= _U32_MASK
        self.sample = sample
        self._sum = (self._sum - self._buffer[self._position] + sample) & _U32_MASK
        self._buffer[self._position] = sample
        self._position = (self._position + 1) % self.size
        self.filtered_value = self._sum // self.size
        return self.filtered_value

    @property
    def window(self) -> tuple[int, ...]:
        """The stored samples in buffer order."""
        return tuple(self._buffer)