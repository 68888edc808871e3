from collections.abc import Sequence

import numpy as np
import numpy.typing as npt


class FrequencySequence(Sequence):
    """
    Ordered, read-only list of frequencies in Hz.

    Subclasses only decide how the values are generated; storage, indexing
    and validation live here.
    """

    def __init__(self, values: npt.ArrayLike) -> None:
        data = np.array(values, dtype=np.float64).reshape(-1)
        _check_frequencies(data)
        data.flags.writeable = False
        self._data = data

    @property
    def data(self) -> npt.NDArray[np.float64]:
        return self._data

    @property
    def size(self) -> int:
        return self._data.size

    def __len__(self) -> int:
        return self._data.size

    def __getitem__(self, index):
        return self._data[index]

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self._data, dtype=dtype)
        if dtype is None:
            return self._data
        return self._data.astype(dtype)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size})"


class LinearSequence(FrequencySequence):
    """Evenly spaced frequencies: first, first + increment, ..."""

    def __init__(self, first: float, increment: float, size: int) -> None:
        self.first = first
        self.increment = increment
        super().__init__(first + increment * np.arange(size))


class LogSequence(FrequencySequence):
    """Geometric frequencies: first, first * ratio, first * ratio**2, ..."""

    def __init__(self, first: float, ratio: float, size: int) -> None:
        self.first = first
        self.ratio = ratio
        super().__init__(first * ratio ** np.arange(size))


class DataSequence(FrequencySequence):
    """Frequencies taken directly from caller-supplied values."""


def as_frequencies(frequencies) -> npt.NDArray[np.float64]:
    """
    Normalize any supported frequency input to a 1-D float array

    Parameters:
    -----------
    frequencies : FrequencySequence, float or array_like
        Frequencies in Hz

    Returns:
    --------
    ndarray
        Frequencies as a 1-D float64 array
    """
    if isinstance(frequencies, FrequencySequence):
        return frequencies.data
    data = np.atleast_1d(np.asarray(frequencies, dtype=np.float64)).reshape(-1)
    _check_frequencies(data)
    return data


def _check_frequencies(data: npt.NDArray[np.float64]) -> None:
    if data.size == 0:
        raise ValueError("Frequency sequence must not be empty")
    if not np.all(np.isfinite(data)):
        raise ValueError("Frequencies must be finite")
    if np.any(data <= 0):
        raise ValueError("Frequencies must be positive")
