from __future__ import annotations

import pytest

from restaurant_finder.intent.models import Intent

from ._helpers import REJECTED_INTENT, SUSHI_INTENT


@pytest.fixture
def sushi_intent() -> Intent:
    return Intent.model_validate(SUSHI_INTENT)


@pytest.fixture
def rejected_intent() -> Intent:
    return Intent.model_validate(REJECTED_INTENT)
