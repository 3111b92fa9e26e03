"""
pyc8.timer - Delay and sound timers for PyC8.

Both counters count down at 60Hz while nonzero. The clock comes from the host, never
from instruction execution.
"""

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class TimerPair(object):
    """ The delay and sound counters. """
    def __init__(self, sound_changed_callback = None):
        self.sound_changed_callback = sound_changed_callback
        self.__delay = 0
        self.__sound = 0

    def reset(self):
        """ Stop both timers. """
        self.delay = 0
        self.sound = 0

    @property
    def delay(self):
        """ Returns the current delay counter. """
        return self.__delay

    @delay.setter
    def delay(self, value):
        """ Sets the delay counter. """
        self.__delay = value & 0xFF

    @property
    def sound(self):
        """ Returns the current sound counter. """
        return self.__sound

    @sound.setter
    def sound(self, value):
        """ Sets the sound counter and calls the callback if the buzzer turned on or off. """
        was_active = self.sound_active
        self.__sound = value & 0xFF
        if was_active != self.sound_active and callable(self.sound_changed_callback):
            self.sound_changed_callback(self.sound_active)

    @property
    def sound_active(self):
        """ The buzzer sounds while the sound counter is nonzero. """
        return self.__sound > 0

    def tick(self):
        """ Handle one 60Hz clock tick, decrementing each nonzero counter. """
        if self.__delay > 0:
            self.__delay -= 1
        if self.__sound > 0:
            self.sound = self.__sound - 1
