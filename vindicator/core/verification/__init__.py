"""Golden-file verification of indicators."""

from vindicator.core.verification.assertions import (
    Assertion,
    ConvergenceAssertion,
    assert_default_state,
    assert_delta_decreases,
    assert_selected_within,
    assert_within,
)
from vindicator.core.verification.replay import ReplaySummary, replay, verify_indicator

__all__ = [
    "Assertion",
    "ConvergenceAssertion",
    "ReplaySummary",
    "assert_default_state",
    "assert_delta_decreases",
    "assert_selected_within",
    "assert_within",
    "replay",
    "verify_indicator",
]
