#!/usr/bin/env python

"""
C8Dis - Disassembles a raw CHIP-8 ROM to stdout.
"""

# Standard library imports
import sys

# PyC8 imports
from pyc8.constants import PROGRAM_START
from pyc8.decoder import disassemble
from pyc8.helpers import bytes_to_word

def disassemble_rom(data, start = PROGRAM_START):
    """ Yields (address, opcode, text) for every word in data, a trailing odd byte is padded. """
    data = bytearray(data)
    if len(data) % 2:
        data.append(0x00)
    for offset in range(0, len(data), 2):
        opcode = bytes_to_word(data[offset:offset + 2])
        yield start + offset, opcode, disassemble(opcode)

def main():
    """ Main application. """
    with open(sys.argv[1], "rb") as fileptr:
        data = fileptr.read()

    for address, opcode, text in disassemble_rom(data):
        print("0x%03x: %04x  %s" % (address, opcode, text))

if __name__ == "__main__":
    main()
