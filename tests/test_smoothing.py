import numpy as np
import pytest

from pulsemeter.config import Settings
from pulsemeter.core import InvalidInputError, smooth
from pulsemeter.core.smoothing import kernel_offsets


def test_kernel_offsets():
    assert kernel_offsets(3) == (1, 1)
    assert kernel_offsets(5) == (2, 2)
    assert kernel_offsets(4) == (1, 2)
    assert kernel_offsets(6) == (2, 3)


def test_odd_kernel_is_centred():
    data = [0.0, 0.0, 3.0, 0.0, 0.0]
    np.testing.assert_allclose(smooth(data, 3), [0.0, 1.0, 1.0, 1.0, 0.0])


def test_even_kernel_is_left_biased():
    data = [0.0, 4.0, 0.0, 0.0, 8.0, 0.0]
    np.testing.assert_allclose(smooth(data, 4), [0.0, 1.0, 3.0, 2.0, 8.0, 0.0])


def test_kernel_equal_to_length():
    data = [1.0, 2.0, 3.0]
    np.testing.assert_allclose(smooth(data, 3), [1.0, 2.0, 3.0])


@pytest.mark.parametrize("kernel", [3, 4, 7, 10, 15])
def test_length_and_boundaries_preserved(kernel):
    rng = np.random.default_rng(kernel)
    data = rng.normal(size=64)
    out = smooth(data, kernel)
    start, end = kernel_offsets(kernel)
    assert out.shape == data.shape
    assert np.array_equal(out[:start], data[:start])
    assert np.array_equal(out[data.size - end :], data[data.size - end :])


def test_input_not_modified():
    data = np.array([0.0, 9.0, 0.0, 9.0, 0.0])
    copy = data.copy()
    smooth(data, 3)
    np.testing.assert_array_equal(data, copy)


def test_kernel_from_settings():
    settings = Settings()
    settings.smoothing.kernel_size = 3
    data = [0.0, 0.0, 3.0, 0.0, 0.0]
    np.testing.assert_allclose(smooth(data, settings=settings), smooth(data, 3))


@pytest.mark.parametrize(
    "data, kernel",
    [
        ([], 3),
        ([1.0, 2.0, 3.0], 2),
        ([1.0, 2.0], 3),
    ],
)
def test_invalid_arguments(data, kernel):
    with pytest.raises(InvalidInputError):
        smooth(data, kernel)
