"""
pyc8.speaker - The CHIP-8 buzzer as a square wave using Pygame.
"""

# Standard library imports
import sys
import array

# PyC8 imports
from pyc8.interface import Buzzer

# Pygame imports
import pygame

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
SAMPLE_RATE = 44100
SIZE = -16
CHANNELS = 1
MIN_SHORT = -32768
MAX_SHORT = 32767
DEFAULT_TONE = 440

# Functions
def square_wave(frequency, volume = 0.25):
    """ Returns one second of a square wave at frequency as signed 16 bit samples. """
    if frequency <= 0:
        raise ValueError("frequency must be positive!")

    data = array.array("h", (0,) * SAMPLE_RATE)
    half_period = max(int(float(SAMPLE_RATE) / (frequency * 2)), 1)
    high = int(MAX_SHORT * volume)
    low = int(MIN_SHORT * volume)
    for index in range(SAMPLE_RATE):
        data[index] = low if (index // half_period) & 0x1 else high
    return data

# Classes
class PygameBuzzer(Buzzer):
    """ Plays a fixed tone while the sound timer is running. """
    def __init__(self, frequency = DEFAULT_TONE):
        self.data = square_wave(frequency)
        self.sound = None
        self.active = False

    def init(self):
        """ Bring up the mixer, must be called before pygame.init(). """
        pygame.mixer.pre_init(SAMPLE_RATE, SIZE, CHANNELS)

    def set_active(self, active):
        """ Start or stop the tone, does nothing if it is already in that state. """
        if active == self.active:
            return

        self.active = active
        if active:
            self.play()
        else:
            self.stop()

    def play(self):
        """ Plays the tone until stopped. """
        if pygame.mixer.get_init() is None:
            log.debug("Mixer not initialized, buzzer is silent.")
            return

        self.sound = pygame.mixer.Sound(buffer = self.data)
        self.sound.play(loops = -1)

    def stop(self):
        """ Stop a playing sound. """
        if self.sound is not None:
            self.sound.stop()
            self.sound = None

def main():
    """ Test application. """
    buzzer = PygameBuzzer()
    buzzer.init()
    pygame.init()
    pygame.display.set_mode((320, 160))

    while True:
        for event in pygame.event.get():
            if event.type == pygame.KEYDOWN:
                buzzer.set_active(True)
            elif event.type == pygame.KEYUP:
                buzzer.set_active(False)
            elif event.type == pygame.QUIT:
                sys.exit()

if __name__ == "__main__":
    main()
