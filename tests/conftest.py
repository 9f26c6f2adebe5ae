from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional

import pytest


@pytest.fixture(params=["sequential", "threaded"])
def executor(request: pytest.FixtureRequest) -> Iterator[Optional[ThreadPoolExecutor]]:
    """Run a test once without an executor and once with a thread pool."""
    if request.param == "sequential":
        yield None
        return
    with ThreadPoolExecutor(max_workers=8) as pool:
        yield pool
