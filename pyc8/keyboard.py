"""
pyc8.keyboard - Latch for the 16 key hexadecimal keypad.

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F
"""

# PyC8 imports
from pyc8.constants import NUM_KEYS

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class KeyboardLatch(object):
    """ Holds the pressed state of each key and the state of a pending key wait. """
    def __init__(self):
        self.keys = [False] * NUM_KEYS
        self.waiting = False
        self.target_register = None
        self.pending_key = None

    def reset(self):
        """ Release every key and cancel any wait. """
        self.keys = [False] * NUM_KEYS
        self.waiting = False
        self.target_register = None
        self.pending_key = None

    def set_key(self, index, pressed):
        """ Update the state of one key, latching it for a waiting program if newly pressed. """
        if not 0 <= index < NUM_KEYS:
            raise ValueError("key index must be in the range [0, 0xF]!")

        pressed = bool(pressed)
        if pressed and not self.keys[index] and self.waiting and self.pending_key is None:
            log.debug("Key 0x%x latched for V%X.", index, self.target_register)
            self.pending_key = index

        self.keys[index] = pressed

    def is_pressed(self, index):
        """ Returns the state of the key selected by the low nibble of index. """
        return self.keys[index & 0x0F]

    def begin_wait(self, register):
        """ Start waiting for a key to be pressed, the key will go to the supplied register. """
        self.waiting = True
        self.target_register = register
        self.pending_key = None

    def take_pending_key(self, accept_held = True):
        """
        Returns (register, key) and ends the wait if a key has been pressed since the wait
        began, otherwise returns None.

        With accept_held a key that was already down when the wait began also counts, the
        lowest numbered one wins.
        """
        if not self.waiting:
            return None

        key = self.pending_key
        if key is None and accept_held:
            key = next((index for index, pressed in enumerate(self.keys) if pressed), None)
        if key is None:
            return None

        result = (self.target_register, key)
        self.waiting = False
        self.target_register = None
        self.pending_key = None
        return result
