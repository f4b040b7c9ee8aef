import io

import pytest


class FakeSynth:
    def __init__(self, audio=b"ID3fake-mp3", error=None):
        self.audio = audio
        self.error = error
        self.requests = []

    async def __call__(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.audio


class TerminalInput(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def fake_synth():
    return FakeSynth()


@pytest.fixture(autouse=True)
def terminal_stdin(monkeypatch):
    """Run every test as if launched from an interactive terminal."""
    monkeypatch.setattr("sys.stdin", TerminalInput())
