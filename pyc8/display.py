"""
pyc8.display - Pygame display for the PyC8 framebuffer.
"""

# Standard library imports
from collections import namedtuple

# PyC8 imports
from pyc8.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from pyc8.interface import DisplayAdapter

# Pygame Imports
import pygame

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
DEFAULT_SCALE = 10

Palette = namedtuple("Palette", ["off", "on"])

BLACK = (0x00, 0x00, 0x00)
WHITE = (0xFF, 0xFF, 0xFF)
GREEN = (0x00, 0xC0, 0x00)
AMBER = (0xFF, 0xB0, 0x00)

PALETTE_WHITE = Palette(BLACK, WHITE)
PALETTE_GREEN = Palette(BLACK, GREEN)
PALETTE_AMBER = Palette(BLACK, AMBER)

PALETTES = {
    "white" : PALETTE_WHITE,
    "green" : PALETTE_GREEN,
    "amber" : PALETTE_AMBER,
}

# Classes
class PygameDisplay(DisplayAdapter):
    """ Renders the framebuffer to a Pygame window with each pixel blown up to a square. """
    def __init__(self, scale = DEFAULT_SCALE, palette = PALETTE_WHITE, caption = "PyC8"):
        self.scale = scale
        self.palette = palette
        self.caption = caption

        # Handle to the Pygame display object.
        self.screen = None

    def get_resolution(self):
        return SCREEN_WIDTH * self.scale, SCREEN_HEIGHT * self.scale

    def reset(self):
        pygame.init()
        self.screen = pygame.display.set_mode(self.get_resolution())
        pygame.display.set_caption(self.caption)

    def draw(self, framebuffer):
        """ Update the "physical" display if the framebuffer changed. """
        if not framebuffer.dirty or self.screen is None:
            return

        self.blit_framebuffer(framebuffer)
        self.present()
        framebuffer.dirty = False

    def blit_framebuffer(self, framebuffer):
        """ Paint every set pixel onto a cleared surface. """
        scale = self.scale
        self.screen.fill(self.palette.off)
        for y, row in enumerate(framebuffer.snapshot()):
            for x, pixel in enumerate(row):
                if pixel:
                    self.screen.fill(self.palette.on, (x * scale, y * scale, scale, scale))

    def present(self):
        pygame.display.flip()

# Test application.
def main():
    """ Test application for the display, draws the font set. """
    import sys
    from pyc8.constants import FONT_SET, FONT_GLYPH_SIZE
    from pyc8.framebuffer import Framebuffer

    framebuffer = Framebuffer()
    for digit in range(16):
        glyph = FONT_SET[digit * FONT_GLYPH_SIZE:(digit + 1) * FONT_GLYPH_SIZE]
        framebuffer.draw_sprite((digit % 8) * 8, (digit // 8) * 8, glyph)

    display = PygameDisplay()
    display.reset()
    display.draw(framebuffer)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                sys.exit()

if __name__ == "__main__":
    main()
