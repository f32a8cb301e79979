import os
import random
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine modules can be imported
sys.path.append(os.getcwd())

from sprite_engine.core.game import FrameScheduler
from sprite_engine.graphics.surface import RenderSurface


@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.quit'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.key'), \
         patch('pygame.font'), \
         patch('pygame.Surface'):
        yield


class ManualScheduler(FrameScheduler):
    """Scheduler driven by the test: fire(timestamp) runs pending frames."""

    def __init__(self):
        self.pending = {}
        self._next = 1

    def request_frame(self, callback):
        handle = self._next
        self._next += 1
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.pending.pop(handle, None)

    def fire(self, timestamp):
        callbacks = list(self.pending.values())
        self.pending.clear()
        for callback in callbacks:
            callback(timestamp)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def surface():
    """Render surface that records calls."""
    return MagicMock(spec=RenderSurface)


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from sprite_engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def engine(rng):
    """Empty 800x600 engine."""
    from sprite_engine.core.engine import Engine
    return Engine(800, 600, rng=rng)


@pytest.fixture
def config():
    from dodge.config import SessionConfig
    return SessionConfig()


@pytest.fixture
def session(config, event_bus):
    """Seeded Dodge session."""
    from dodge.session import GameSession
    return GameSession(config, rng=random.Random(42), event_bus=event_bus)
