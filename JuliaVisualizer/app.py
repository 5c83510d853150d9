"""
Main application module for the Julia set visualizer.

Contains the JuliaApp class which handles:
- Window setup and main loop
- Translation of keyboard input into controller commands
- Rendering and display of one full frame per loop iteration
"""

import os
from datetime import datetime

import pygame

from .colormaps import get_palette, list_palette_names
from .compute import warmup_jit
from .config import Settings
from .controller import Command, InteractionController, apply_command
from .renderer import FrameRenderer
from .state import ViewState


# Keyboard bindings
KEY_COMMANDS = {
    pygame.K_UP: Command.PAN_UP,
    pygame.K_DOWN: Command.PAN_DOWN,
    pygame.K_LEFT: Command.PAN_LEFT,
    pygame.K_RIGHT: Command.PAN_RIGHT,
    pygame.K_EQUALS: Command.ZOOM_IN,
    pygame.K_PLUS: Command.ZOOM_IN,
    pygame.K_KP_PLUS: Command.ZOOM_IN,
    pygame.K_MINUS: Command.ZOOM_OUT,
    pygame.K_KP_MINUS: Command.ZOOM_OUT,
    pygame.K_d: Command.REAL_INCREASE,
    pygame.K_a: Command.REAL_DECREASE,
    pygame.K_w: Command.IMAG_INCREASE,
    pygame.K_s: Command.IMAG_DECREASE,
    pygame.K_p: Command.REPORT,
    pygame.K_r: Command.RESET,
    pygame.K_ESCAPE: Command.QUIT,
    pygame.K_q: Command.QUIT,
}


def commands_for_event(event):
    """
    Translate one pygame event into controller commands.

    Returns:
        List of Command (empty for events the controller ignores)
    """
    if event.type == pygame.QUIT:
        return [Command.QUIT]
    if event.type == pygame.KEYDOWN and event.key in KEY_COMMANDS:
        return [KEY_COMMANDS[event.key]]
    return []


class JuliaApp:
    """
    Main application class for the Julia set visualizer.

    Handles the pygame window, event loop, and hands the renderer's
    buffer to the display every frame.
    """

    FPS_LIMIT = 60

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Validated Settings (defaults if None)
        """
        self.settings = settings or Settings()
        self.width = self.settings.width
        self.height = self.settings.height
        self.render_params = self.settings.render_parameters()

        self.controller = InteractionController(
            view=ViewState(),
            params=self.settings.julia_parameters(),
            width=self.width,
            height=self.height,
        )

        self.palette_names = list_palette_names()
        self.palette_index = self.palette_names.index(self.settings.palette)
        self.renderer = FrameRenderer(get_palette(self.settings.palette))

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        try:
            pygame.display.set_caption("Compiling (first run only)...")
            warmup_jit(self.renderer.palette)

            while self.controller.running:
                self._handle_events()
                if not self.controller.running:
                    break
                self._draw()
                self.clock.tick(self.FPS_LIMIT)
        finally:
            pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.DOUBLEBUF
        )
        self.clock = pygame.time.Clock()

    def _handle_events(self):
        """Apply all pending input, in arrival order."""
        for event in pygame.event.get():
            if event.type == pygame.KEYDOWN and event.key == pygame.K_c:
                self._next_palette()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F12:
                self._save_image()
            for command in commands_for_event(event):
                apply_command(self.controller, command)

    def _next_palette(self):
        """Cycle to the next registered palette."""
        self.palette_index = (self.palette_index + 1) % len(self.palette_names)
        name = self.palette_names[self.palette_index]
        self.renderer.set_palette(get_palette(name))
        print(f"Palette: {name}")

    def _draw(self):
        """Render and present one frame."""
        # Size is queried every frame
        width, height = self.screen.get_size()
        if (width, height) != (self.controller.width, self.controller.height):
            self.controller.resize(width, height)

        frame = self.renderer.render(
            width, height,
            self.controller.view,
            self.controller.params,
            self.render_params,
        )
        self.current_surface = pygame.image.frombuffer(
            frame.tobytes(), (width, height), "ARGB"
        )
        self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()

        c = self.controller.params.constant
        pygame.display.set_caption(
            f"Julia set c = {c} - arrows pan, +/- zoom, WASD move c, P print"
        )

    def _save_image(self):
        """Save the last presented frame as a PNG in the working directory."""
        if self.current_surface is None:
            print("Warning: nothing rendered yet, not saving")
            return
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.join(os.getcwd(), f"julia_{timestamp}.png")
        pygame.image.save(self.current_surface, filename)
        print(f"Image saved to: {filename}")


def run(settings=None):
    """
    Run the Julia set visualizer.

    Args:
        settings: Validated Settings (defaults if None)
    """
    app = JuliaApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pass
