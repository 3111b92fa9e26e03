"""
pyc8.ui - Pygame event handling for PyC8.
"""

# Standard library imports
import sys

# PyGame Imports
import pygame
from pygame.locals import *

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants

# The keypad is mapped onto the left hand side of a QWERTY keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <=   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
PYGAME_KEY_TO_CHIP8_KEY = {
    # Pylint cannot infer the constants from Pygame.
    # pylint: disable=undefined-variable
    K_1 : 0x1,
    K_2 : 0x2,
    K_3 : 0x3,
    K_4 : 0xC,

    K_q : 0x4,
    K_w : 0x5,
    K_e : 0x6,
    K_r : 0xD,

    K_a : 0x7,
    K_s : 0x8,
    K_d : 0x9,
    K_f : 0xE,

    K_z : 0xA,
    K_x : 0x0,
    K_c : 0xB,
    K_v : 0xF,
    # pylint: enable=undefined-variable
}

assert len(PYGAME_KEY_TO_CHIP8_KEY) == 16

# Classes
class PygameManager(object):
    """ Manages interactions with the Pygame UI for PyC8. """
    def __init__(self, keyboard, display):
        self.keyboard = keyboard
        self.display = display
        self.display.reset()

    def poll(self):
        """ Run one iteration of the Pygame machine. """
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event):
        """ Dispatch a single Pygame event. """
        # pylint: disable=undefined-variable
        if event.type == QUIT:
            log.critical("Pygame QUIT detected, powering down...")
            sys.exit()

        elif event.type == KEYDOWN:
            key = PYGAME_KEY_TO_CHIP8_KEY.get(event.key, None)
            if key is not None:
                self.keyboard.key_event(key, True)

        elif event.type == KEYUP:
            key = PYGAME_KEY_TO_CHIP8_KEY.get(event.key, None)
            if key is not None:
                self.keyboard.key_event(key, False)
