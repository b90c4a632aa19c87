from __future__ import annotations

from collections.abc import Iterator

import pytest

from tilewave.util import rng


@pytest.fixture(autouse=True)
def reset_shared_rng_provider() -> Iterator[None]:
    """Start and end every test without a shared RNG provider."""
    rng._provider = None
    yield
    rng._provider = None
