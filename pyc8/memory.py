"""
pyc8.memory - The 4KB memory image for PyC8.
"""

# Standard library imports
import array

# PyC8 imports
from pyc8.constants import MEMORY_SIZE, MAX_ADDRESS, PROGRAM_START, MAX_PROGRAM_SIZE
from pyc8.constants import FONT_ADDRESS, FONT_GLYPH_SIZE, FONT_SET
from pyc8.exceptions import RomTooLarge, OutOfBoundsFetch, OutOfBoundsAccess
from pyc8.helpers import bytes_to_word

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class MemoryImage(object):
    """ Flat byte addressable memory holding the font set and the loaded program. """
    def __init__(self, size = MEMORY_SIZE):
        self.contents = array.array("B", (0,) * size)

    def __repr__(self):
        return "<%s(size=0x%x)>" % (self.__class__.__name__, len(self.contents))

    def __len__(self):
        return len(self.contents)

    def reset(self):
        """ Zero all of memory and put the font set back. """
        for index in range(len(self.contents)):
            self.contents[index] = 0
        self.load_font()

    def load_font(self):
        """ Write the hexadecimal digit glyphs into the reserved area. """
        for index, byte in enumerate(FONT_SET, start = FONT_ADDRESS):
            self.contents[index] = byte

    @staticmethod
    def font_address(digit):
        """ Returns the address of the glyph for the low nibble of digit. """
        return FONT_ADDRESS + (digit & 0x0F) * FONT_GLYPH_SIZE

    # Program loading.
    def load_program(self, data):
        """ Load a raw program image at 0x200, the old program area is cleared first. """
        data = bytearray(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomTooLarge(len(data), MAX_PROGRAM_SIZE)

        for index in range(PROGRAM_START, len(self.contents)):
            self.contents[index] = 0
        for index, byte in enumerate(data, start = PROGRAM_START):
            self.contents[index] = byte

        log.debug("Loaded %d program bytes at 0x%03x.", len(data), PROGRAM_START)

    def load_from_file(self, filename):
        """ Load this memory with the contents of a ROM file. """
        with open(filename, "rb") as fileptr:
            data = fileptr.read()

        self.load_program(data)
        return len(data)

    # Bounds checking.
    def check_range(self, address, length = 1):
        """ Raise OutOfBoundsAccess unless every address in [address, address + length) is valid. """
        if address < 0:
            raise OutOfBoundsAccess(address)
        if length > 0 and address + length - 1 > MAX_ADDRESS:
            raise OutOfBoundsAccess(max(address, MAX_ADDRESS + 1))

    # Accessors.
    def read16(self, address):
        """ Fetch the big-endian instruction word at address. """
        if address < 0 or address + 1 > MAX_ADDRESS:
            raise OutOfBoundsFetch(address)
        return bytes_to_word((self.contents[address], self.contents[address + 1]))

    def read8(self, address):
        self.check_range(address)
        return self.contents[address]

    def write8(self, address, value):
        self.check_range(address)
        self.contents[address] = value & 0xFF

    def read_block(self, address, length):
        """ Returns a list of length bytes starting at address. """
        self.check_range(address, length)
        return self.contents[address:address + length].tolist()
