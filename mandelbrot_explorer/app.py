"""
Main application module for the Mandelbrot explorer.

Contains the ExplorerApp class which handles:
- Window setup and main loop
- Translating user input into navigation commands
- Applying queued commands between frames
- Displaying each rendered frame with a status overlay
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime

import pygame

from .colormaps import PALETTE_NAMES, list_palette_ids
from .compute import warmup_jit
from .navigation import (
    AdjustIterations,
    Direction,
    Pan,
    PanDirection,
    Quit,
    ResetView,
    SelectPalette,
    Zoom,
    apply_commands,
)
from .renderer import FramePipeline, format_status
from .settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveFrame:
    """Request to write the current frame to a PNG file."""


PAN_KEYS = {
    pygame.K_w: PanDirection.UP,
    pygame.K_UP: PanDirection.UP,
    pygame.K_s: PanDirection.DOWN,
    pygame.K_DOWN: PanDirection.DOWN,
    pygame.K_a: PanDirection.LEFT,
    pygame.K_LEFT: PanDirection.LEFT,
    pygame.K_d: PanDirection.RIGHT,
    pygame.K_RIGHT: PanDirection.RIGHT,
}

# Number keys 1-6 select the palette with the same id
PALETTE_KEYS = {pygame.K_0 + i: i for i in list_palette_ids() if 0 < i < 10}

QUIT_KEYS = (pygame.K_END, pygame.K_ESCAPE)


def translate_event(event, cursor_pos):
    """
    Convert a pygame event into a command.

    Args:
        event: pygame event
        cursor_pos: (x, y) mouse position in window pixels

    Returns:
        A navigation command, SaveFrame, or None if the event is ignored
    """
    if event.type == pygame.QUIT:
        return Quit()

    if event.type == pygame.KEYDOWN:
        if event.key in QUIT_KEYS:
            return Quit()
        if event.key in PAN_KEYS:
            return Pan(PAN_KEYS[event.key])
        if event.key in PALETTE_KEYS:
            return SelectPalette(PALETTE_KEYS[event.key])
        if event.key == pygame.K_r:
            return ResetView()
        if event.key == pygame.K_p:
            return SaveFrame()
        return None

    if event.type == pygame.MOUSEWHEEL:
        if event.y == 0:
            return None
        return Zoom(zoom_in=event.y > 0, cursor=tuple(cursor_pos))

    if event.type == pygame.MOUSEBUTTONDOWN:
        if event.button == 1:
            return AdjustIterations(Direction.INCREASE)
        if event.button == 3:
            return AdjustIterations(Direction.DECREASE)

    return None


class ExplorerApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop. Each frame runs the same
    fixed sequence: pump input into a command queue, apply the queue to the
    viewport, render the new viewport, draw it.
    """

    CAPTION = "Mandelbrot Explorer"
    FONT_SIZE = 24
    TEXT_COLOR = (255, 255, 255)
    LINE_SPACING = 4

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings instance (default: built-in defaults)
        """
        self.settings = settings or Settings()
        self.width = self.settings.width
        self.height = self.settings.height

        self.default_state = self.settings.initial_state()
        self.state = self.default_state

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.font = None

        self.pipeline = FramePipeline(self.width, self.height)
        self.current_surface = None
        self.pending = []
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup()

        self.running = True
        while self.running:
            self._handle_events()
            if not self.running:
                break
            self._apply_pending()
            self._render()
            self._draw()

            self.clock.tick(self.settings.fps_limit)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.CAPTION)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, self.FONT_SIZE)

    def _warmup(self):
        """Warm up JIT before the first frame."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.pipeline.palette_for(self.state.palette_id))
        pygame.display.set_caption(self.CAPTION)

    def _handle_events(self):
        """Queue commands for every pending pygame event."""
        cursor = pygame.mouse.get_pos()
        for event in pygame.event.get():
            command = translate_event(event, cursor)
            if command is None:
                continue
            if isinstance(command, Quit):
                self.running = False
                return
            if isinstance(command, SaveFrame):
                self._save_frame()
                continue
            self.pending.append(command)

    def _apply_pending(self):
        """Apply queued commands serially before this frame is computed."""
        if not self.pending:
            return
        previous_palette = self.state.palette_id
        self.state = apply_commands(
            self.state, self.pending, self.width, self.height,
            cap=self.settings.max_iteration_budget,
            default=self.default_state,
        )
        self.pending = []
        if self.state.palette_id != previous_palette:
            logger.info("Palette %d (%s)", self.state.palette_id,
                        PALETTE_NAMES[self.state.palette_id])

    def _render(self):
        """Compute the frame for the current viewport."""
        frame = self.pipeline.render(self.state)
        self.current_surface = pygame.image.frombuffer(
            frame, (self.width, self.height), "RGBA"
        )

    def _draw(self):
        """Draw the current frame and the status overlay."""
        self.screen.blit(self.current_surface, (0, 0))

        status = format_status(self.state, self.clock.get_fps())
        y = self.LINE_SPACING
        for line in status.splitlines():
            text = self.font.render(" " + line, True, self.TEXT_COLOR)
            self.screen.blit(text, (0, y))
            y += text.get_height() + self.LINE_SPACING

        pygame.display.flip()

    def _save_frame(self):
        """Save the last rendered frame as a PNG in the working directory."""
        if self.current_surface is None:
            return
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        pygame.image.save(self.current_surface, filename)
        logger.info("Frame saved to: %s", filename)


def run(settings=None):
    """
    Run the Mandelbrot explorer.

    Args:
        settings: Settings instance (default: built-in defaults)
    """
    app = ExplorerApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
