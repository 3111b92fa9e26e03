"""
pyc8.machine - The complete CHIP-8 machine and the interface used by hosts.
"""

# Standard library imports
import random

# PyC8 imports
from pyc8.cpu import CPU, Quirks
from pyc8.framebuffer import Framebuffer
from pyc8.interface import KeyboardController
from pyc8.keyboard import KeyboardLatch
from pyc8.memory import MemoryImage
from pyc8.registers import RegisterFile
from pyc8.timer import TimerPair

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class Chip8(KeyboardController):
    """
    Owns all of the state for one machine.

    The host drives two independent clocks: step() as fast as it wants to execute
    instructions and tick_timer() at 60Hz.
    """
    def __init__(self, quirks = None, seed = None, sound_changed_callback = None):
        self.memory = MemoryImage()
        self.regs = RegisterFile()
        self.framebuffer = Framebuffer()
        self.keyboard = KeyboardLatch()
        self.timers = TimerPair(sound_changed_callback)
        self.cpu = CPU(
            self.memory,
            self.regs,
            self.framebuffer,
            self.keyboard,
            self.timers,
            quirks = quirks if quirks is not None else Quirks(),
            rng = random.Random(seed),
        )
        self.reset()

    def reset(self):
        """ Return to power on state: font resident, registers zeroed, PC at 0x200. """
        self.memory.reset()
        self.regs.reset()
        self.framebuffer.clear()
        self.keyboard.reset()
        self.timers.reset()

    def load_program(self, data):
        """ Load a raw ROM image at 0x200, raising RomTooLarge if it doesn't fit. """
        self.memory.load_program(data)
        log.info("Loaded %d byte program.", len(data))

    def load_rom_file(self, filename):
        """ Load a raw ROM image from a file. """
        size = self.memory.load_from_file(filename)
        log.info("Loaded %d byte program from %s.", size, filename)

    def step(self):
        """ Execute one instruction, returns a StepOutcome. """
        return self.cpu.step()

    def tick_timer(self):
        """ Handle one 60Hz tick of the delay and sound timers. """
        self.timers.tick()

    def set_key(self, index, pressed):
        """ Update the state of one of the 16 keys. """
        self.keyboard.set_key(index, pressed)

    def key_event(self, key, pressed):
        """ Keyboard events from the UI go straight to the keypad. """
        self.set_key(key, pressed)

    def framebuffer_snapshot(self):
        """ Returns a read-only copy of the 64x32 pixel grid. """
        return self.framebuffer.snapshot()

    def sound_timer_value(self):
        """ Returns the current sound timer count. """
        return self.timers.sound

    def delay_timer_value(self):
        """ Returns the current delay timer count. """
        return self.timers.delay

    @property
    def paused(self):
        """ True while the program is waiting for a key. """
        return self.cpu.paused
