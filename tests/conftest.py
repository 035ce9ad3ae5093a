import numpy as np
import pytest


def make_square_wave(n=200, period=20, high_start=3, width=5, low=0.0, high=5.0):
    """Pulse train that is ``high`` for ``width`` samples of every ``period``."""
    phase = np.arange(n) % period
    return np.where((phase >= high_start) & (phase < high_start + width), high, low)


@pytest.fixture
def square_wave():
    return make_square_wave
