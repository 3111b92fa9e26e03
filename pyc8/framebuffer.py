"""
pyc8.framebuffer - Monochrome 64x32 framebuffer with XOR sprite drawing.
"""

# Standard library imports
import array

# PyC8 imports
from pyc8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Classes
class Framebuffer(object):
    """ The pixel grid, one byte per pixel where 0 is clear and 1 is set. """
    def __init__(self, width = SCREEN_WIDTH, height = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = array.array("B", (0,) * (width * height))

        # Flag to indicate the pixels changed since the last time a renderer looked.
        self.dirty = True

    def __repr__(self):
        return "<%s(%dx%d)>" % (self.__class__.__name__, self.width, self.height)

    def __str__(self):
        return "\n".join("".join("#" if pixel else "." for pixel in row) for row in self.snapshot())

    def clear(self):
        """ Clear every pixel. """
        for index in range(len(self.pixels)):
            self.pixels[index] = 0
        self.dirty = True

    def get_pixel(self, x, y):
        """ Returns True if the pixel at (x, y) is set. """
        return self.pixels[(y % self.height) * self.width + (x % self.width)] == 1

    def snapshot(self):
        """ Returns a read-only copy of the grid as a tuple of rows of booleans. """
        width = self.width
        return tuple(
            tuple(pixel == 1 for pixel in self.pixels[row * width:(row + 1) * width])
            for row in range(self.height)
        )

    def draw_sprite(self, x, y, rows):
        """
        XOR a sprite onto the grid with its top left corner at (x, y).

        Each byte of rows is one 8 pixel row, most significant bit on the left. Both the
        origin and every pixel wrap around the edges of the grid.

        Returns True if any set pixel was cleared.
        """
        origin_x = x % self.width
        origin_y = y % self.height
        collision = False

        for row_index, row in enumerate(rows):
            line = ((origin_y + row_index) % self.height) * self.width
            for column in range(SPRITE_WIDTH):
                if row & (0x80 >> column):
                    index = line + (origin_x + column) % self.width
                    if self.pixels[index]:
                        collision = True
                    self.pixels[index] ^= 1

        if rows:
            self.dirty = True

        return collision
