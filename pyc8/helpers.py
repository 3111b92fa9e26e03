"""
pyc8.helpers - A collection of helper functions used throughout PyC8.
"""

# Functions
def word_to_bytes(value):
    """ Convert a word into a big-endian tuple of 2 bytes. """
    if value < 0 or value > 0xFFFF:
        raise ValueError("value must be in the range [0, 0xFFFF]!")
    return ((value & 0xFF00) >> 8), (value & 0x00FF)
    
def bytes_to_word(data):
    """ Convert a big-endian sequence of 2 bytes into a word. """
    if len(data) != 2:
        raise ValueError("data must be a sequence of 2 bytes!")
    return ((data[0] & 0xFF) << 8) | (data[1] & 0xFF)
    
def opcode_family(opcode):
    """ Returns the top nibble that selects the instruction family. """
    return (opcode & 0xF000) >> 12
    
def opcode_x(opcode):
    return (opcode & 0x0F00) >> 8
    
def opcode_y(opcode):
    return (opcode & 0x00F0) >> 4
    
def opcode_n(opcode):
    return opcode & 0x000F
    
def opcode_nn(opcode):
    return opcode & 0x00FF
    
def opcode_nnn(opcode):
    return opcode & 0x0FFF
    
def to_bcd(value):
    """ Decompose a byte into its hundreds, tens and ones digits. """
    if value < 0 or value > 0xFF:
        raise ValueError("value must be in the range [0, 0xFF]!")
    return value // 100, (value // 10) % 10, value % 10
    
def opcodes_to_bytes(opcodes):
    """ Pack a sequence of opcode words into a big-endian byte string. """
    data = bytearray()
    for opcode in opcodes:
        data.extend(word_to_bytes(opcode))
    return bytes(data)
