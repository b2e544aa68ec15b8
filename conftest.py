"""
Shared fixtures for the ACM Claim Calculator tests
"""
import copy

import pytest

from acm_calculator.services.eligibility_service import EligibilityService
from acm_calculator.services.snapshot_service import SnapshotService


BASE_EVENT = {
    "scheme": "hcc",
    "programme_variant": "inhouse",
    "trainer_type": "external",
    "number_of_trainers": 1,
    "venue": "employer_premises",
    "course_category": "general",
    "duration": "full_day",
    "days": 1,
    "host": {"pax": 10, "distance": "under_100"},
}


@pytest.fixture(scope="session")
def baseline():
    return SnapshotService().baseline()


@pytest.fixture
def service():
    return EligibilityService()


@pytest.fixture
def make_event():
    """Build a raw event dictionary from the in-house default plus overrides"""
    def _make(**overrides):
        event = copy.deepcopy(BASE_EVENT)
        event.update(overrides)
        return event
    return _make


@pytest.fixture
def calculate(service, baseline, make_event):
    """Calculate an estimate against the baseline edition"""
    def _calculate(**overrides):
        return service.calculate(make_event(**overrides), snapshot=baseline)
    return _calculate
