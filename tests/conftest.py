# tests/conftest.py
from __future__ import annotations

import pytest

from numkernel import runtime
from numkernel.context import NumericContext


@pytest.fixture(autouse=True)
def _fresh_runtime():
    """Every test starts with an empty Runtime (default profile values, debug off)."""
    runtime.reset()
    yield
    runtime.reset()


@pytest.fixture
def ctx() -> NumericContext:
    return NumericContext(precision=100)


@pytest.fixture
def D(ctx):
    """Shorthand constructor: D(360) -> Decimal at the fixture's precision."""
    return ctx.bignum
