"""Shared fixtures for settlebench tests."""

import pytest
from factories import make_samples, spread

from settlebench.samples import Sample


@pytest.fixture
def round_zero() -> list[Sample]:
    """Three facilitators: one clearly fastest, two close and noisy."""
    return (
        make_samples("FareSide", spread(661, 24))
        + make_samples("PayAI", spread(1774, 1000))
        + make_samples("Coinbase", spread(2131, 1000))
    )
