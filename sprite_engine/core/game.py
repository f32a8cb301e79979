"""
Frame loop with capped timestep.

One logical thread: wait for the next frame -> compute dt -> update ->
render -> repeat. dt is the wall-clock delta since the previous frame,
clamped to max_timestep. The first frame after start() has dt = 0.

The loop is driven by a FrameScheduler ("call me before the next display
refresh"). Game wraps a pygame window and a pygame-backed scheduler:

    config = GameConfig(title="Dodge", width=800, height=600)
    game = Game(config)
    game.run(on_frame)   # on_frame(dt) updates and draws to game.surface
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable

import pygame

from sprite_engine.core.events import EngineEvent, EventBus
from sprite_engine.graphics.pygame_surface import PygameSurface
from sprite_engine.input.handler import InputHandler

logger = logging.getLogger(__name__)

MAX_TIMESTEP = 0.016  # seconds, ~60Hz

FrameCallback = Callable[[float], None]


def clamp_timestep(dt: float, max_dt: float = MAX_TIMESTEP) -> float:
    """Clamp dt into [0, max_dt]."""
    return max(0.0, min(dt, max_dt))


class FrameClock:
    """Turns frame timestamps (milliseconds) into clamped dt (seconds)."""

    def __init__(self, max_timestep: float = MAX_TIMESTEP):
        self.max_timestep = max_timestep
        self._last_time: float | None = None

    def tick(self, timestamp_ms: float) -> float:
        if self._last_time is None:
            dt = 0.0
        else:
            dt = clamp_timestep((timestamp_ms - self._last_time) / 1000.0, self.max_timestep)
        self._last_time = timestamp_ms
        return dt

    def reset(self) -> None:
        """Forget the previous frame; the next tick returns 0."""
        self._last_time = None


class FrameScheduler(ABC):
    """Requests a single callback before the next display refresh."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """
        Schedule callback(timestamp_ms) once.

        Returns:
            Handle for cancel_frame()
        """

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request. Unknown handles are ignored."""


class GameLoop:
    """
    Self-rescheduling frame loop.

    Each frame is atomic: stop() only prevents the next frame from being
    scheduled, it never interrupts one in progress.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        on_frame: FrameCallback,
        max_timestep: float = MAX_TIMESTEP,
        event_bus: EventBus | None = None,
    ):
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.event_bus = event_bus
        self.clock = FrameClock(max_timestep)
        self._running = False
        self._handle: int | None = None
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self.clock.reset()
        self._handle = self.scheduler.request_frame(self._frame)
        if self.event_bus:
            self.event_bus.publish(EngineEvent.LOOP_STARTED)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        if self.event_bus:
            self.event_bus.publish(EngineEvent.LOOP_STOPPED, frames=self.frame_count)

    def _frame(self, timestamp_ms: float) -> None:
        self._handle = None
        dt = self.clock.tick(timestamp_ms)
        self.on_frame(dt)
        self.frame_count += 1

        if self._running:
            self._handle = self.scheduler.request_frame(self._frame)


class PygameFrameScheduler(FrameScheduler):
    """
    Scheduler paced by pygame.time.Clock.

    run_pending() sleeps until the next frame slot and invokes the callback
    requested for it with a perf_counter timestamp in milliseconds.
    """

    def __init__(self, target_fps: int = 60):
        self.target_fps = target_fps
        self._clock = pygame.time.Clock()
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def run_pending(self) -> None:
        self._clock.tick(self.target_fps)
        callbacks = list(self._pending.values())
        self._pending.clear()

        timestamp = time.perf_counter() * 1000.0
        for callback in callbacks:
            callback(timestamp)


class GameConfig:
    """Configuration for the window and frame loop."""

    def __init__(
        self,
        title: str = "Sprite Engine",
        width: int = 800,
        height: int = 600,
        target_fps: int = 60,
        max_timestep: float = MAX_TIMESTEP,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.max_timestep = max_timestep


class Game:
    """
    Window, input and real-time loop.

    Usage:
        game = Game(GameConfig(title="My Game"))
        game.run(lambda dt: draw(game.surface, dt))
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption(self.config.title)
        logger.info(f"Window created: {self.config.width}x{self.config.height}")

        self.surface = PygameSurface(self.screen)
        self.event_bus = EventBus()
        self.input = InputHandler(event_bus=self.event_bus)
        self.scheduler = PygameFrameScheduler(self.config.target_fps)
        self.loop: GameLoop | None = None

    def run(self, on_frame: FrameCallback) -> None:
        """Run until quit() is called or the window is closed."""
        self.loop = GameLoop(
            self.scheduler,
            self._wrap_frame(on_frame),
            max_timestep=self.config.max_timestep,
            event_bus=self.event_bus,
        )
        self.loop.start()

        while self.scheduler.has_pending:
            self._process_events()
            self.scheduler.run_pending()

        self._shutdown()

    def quit(self) -> None:
        """Request shutdown after the current frame."""
        if self.loop:
            self.loop.stop()
        self.event_bus.publish(EngineEvent.GAME_QUIT)

    def _wrap_frame(self, on_frame: FrameCallback) -> FrameCallback:
        def frame(dt: float) -> None:
            on_frame(dt)
            pygame.display.flip()
        return frame

    def _process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            else:
                self.input.process_event(event)

    def _shutdown(self) -> None:
        logger.info("Shutting down")
        pygame.quit()
