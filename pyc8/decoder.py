"""
pyc8.decoder - Opcode decoder and disassembler for PyC8.

See: http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#3.1
"""

# Standard library imports
from collections import namedtuple

# PyC8 imports
from pyc8.exceptions import InvalidOpcodeException
from pyc8.helpers import opcode_family, opcode_x, opcode_y, opcode_n, opcode_nn, opcode_nnn

# Constants
Instruction = namedtuple("Instruction", ["name", "opcode", "x", "y", "n", "nn", "nnn"])

# Second level decoding for the 0x8XYN ALU family, indexed by N.
ALU_OPERATIONS = {
    0x0 : "ld_vx_vy",
    0x1 : "or",
    0x2 : "and",
    0x3 : "xor",
    0x4 : "add_vx_vy",
    0x5 : "sub",
    0x6 : "shr",
    0x7 : "subn",
    0xE : "shl",
}

# Second level decoding for the 0xEXNN and 0xFXNN families, indexed by NN.
KEY_OPERATIONS = {
    0x9E : "skp",
    0xA1 : "sknp",
}

MISC_OPERATIONS = {
    0x07 : "ld_vx_dt",
    0x0A : "ld_vx_k",
    0x15 : "ld_dt_vx",
    0x18 : "ld_st_vx",
    0x1E : "add_i_vx",
    0x29 : "ld_f_vx",
    0x33 : "ld_b_vx",
    0x55 : "ld_mem_vx",
    0x65 : "ld_vx_mem",
}

# Families that are fully decoded by their top nibble.
SIMPLE_FAMILIES = {
    0x1 : "jp",
    0x2 : "call",
    0x3 : "se_vx_nn",
    0x4 : "sne_vx_nn",
    0x6 : "ld_vx_nn",
    0x7 : "add_vx_nn",
    0xA : "ld_i",
    0xB : "jp_v0",
    0xC : "rnd",
    0xD : "drw",
}

DISASSEMBLY_FORMATS = {
    "cls" : "CLS",
    "ret" : "RET",
    "jp" : "JP 0x{nnn:03X}",
    "call" : "CALL 0x{nnn:03X}",
    "se_vx_nn" : "SE V{x:X}, 0x{nn:02X}",
    "sne_vx_nn" : "SNE V{x:X}, 0x{nn:02X}",
    "se_vx_vy" : "SE V{x:X}, V{y:X}",
    "ld_vx_nn" : "LD V{x:X}, 0x{nn:02X}",
    "add_vx_nn" : "ADD V{x:X}, 0x{nn:02X}",
    "ld_vx_vy" : "LD V{x:X}, V{y:X}",
    "or" : "OR V{x:X}, V{y:X}",
    "and" : "AND V{x:X}, V{y:X}",
    "xor" : "XOR V{x:X}, V{y:X}",
    "add_vx_vy" : "ADD V{x:X}, V{y:X}",
    "sub" : "SUB V{x:X}, V{y:X}",
    "shr" : "SHR V{x:X}, V{y:X}",
    "subn" : "SUBN V{x:X}, V{y:X}",
    "shl" : "SHL V{x:X}, V{y:X}",
    "sne_vx_vy" : "SNE V{x:X}, V{y:X}",
    "ld_i" : "LD I, 0x{nnn:03X}",
    "jp_v0" : "JP V0, 0x{nnn:03X}",
    "rnd" : "RND V{x:X}, 0x{nn:02X}",
    "drw" : "DRW V{x:X}, V{y:X}, {n}",
    "skp" : "SKP V{x:X}",
    "sknp" : "SKNP V{x:X}",
    "ld_vx_dt" : "LD V{x:X}, DT",
    "ld_vx_k" : "LD V{x:X}, K",
    "ld_dt_vx" : "LD DT, V{x:X}",
    "ld_st_vx" : "LD ST, V{x:X}",
    "add_i_vx" : "ADD I, V{x:X}",
    "ld_f_vx" : "LD F, V{x:X}",
    "ld_b_vx" : "LD B, V{x:X}",
    "ld_mem_vx" : "LD [I], V{x:X}",
    "ld_vx_mem" : "LD V{x:X}, [I]",
}

# Functions
def decode_name(opcode):
    """ Returns the instruction name for an opcode or None if the bit pattern is invalid. """
    family = opcode_family(opcode)

    name = SIMPLE_FAMILIES.get(family)
    if name is not None:
        return name

    if family == 0x0:
        if opcode == 0x00E0:
            return "cls"
        elif opcode == 0x00EE:
            return "ret"
        # 0NNN SYS calls into machine code and isn't supported.
        return None

    elif family == 0x5:
        return "se_vx_vy" if opcode_n(opcode) == 0x0 else None

    elif family == 0x8:
        return ALU_OPERATIONS.get(opcode_n(opcode))

    elif family == 0x9:
        return "sne_vx_vy" if opcode_n(opcode) == 0x0 else None

    elif family == 0xE:
        return KEY_OPERATIONS.get(opcode_nn(opcode))

    elif family == 0xF:
        return MISC_OPERATIONS.get(opcode_nn(opcode))

    return None

def decode(opcode, pc = 0):
    """ Decode an opcode into an Instruction, raising InvalidOpcodeException if it isn't one. """
    name = decode_name(opcode)
    if name is None:
        raise InvalidOpcodeException(opcode, pc)

    return Instruction(
        name,
        opcode,
        opcode_x(opcode),
        opcode_y(opcode),
        opcode_n(opcode),
        opcode_nn(opcode),
        opcode_nnn(opcode),
    )

def disassemble(opcode):
    """ Returns the assembly text for an opcode. """
    name = decode_name(opcode)
    if name is None:
        return "??? 0x%04X" % opcode

    return DISASSEMBLY_FORMATS[name].format(
        x = opcode_x(opcode),
        y = opcode_y(opcode),
        n = opcode_n(opcode),
        nn = opcode_nn(opcode),
        nnn = opcode_nnn(opcode),
    )
