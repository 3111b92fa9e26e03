"""
pyc8.interface - Interfaces for the host devices used by the UI classes.
"""

# Classes
class DisplayAdapter(object):
    """ Interface for a display that renders the framebuffer. """

    def reset(self):
        """ Open the display surface. """
        raise NotImplementedError

    def get_resolution(self):
        """ Returns a tuple (width, height) of the display size. """
        raise NotImplementedError

    def draw(self, framebuffer):
        """ Update the display from the supplied framebuffer if it changed. """
        raise NotImplementedError

class Buzzer(object):
    """ Interface for the tone generator driven by the sound timer. """

    def set_active(self, active):
        """ Start or stop the tone. """
        raise NotImplementedError

class KeyboardController(object):
    """ Interface for whatever receives key events from the UI. """

    def key_event(self, key, pressed):
        """ Function called when one of the 16 keys is pressed or released. """
        raise NotImplementedError
