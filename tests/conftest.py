import pytest


class FakeService:
    """Inference double returning canned results per call, in call order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def run(self, encoded_audio, options):
        self.calls.append((encoded_audio, options))
        outcome = self.outcomes[len(self.calls) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_service():
    return FakeService



