"""
pyc8.registers - Register file for the PyC8 CPU.
"""

# Standard library imports
import array

# PyC8 imports
from pyc8.constants import NUM_REGISTERS, FLAG_REGISTER, STACK_DEPTH, PROGRAM_START
from pyc8.exceptions import StackOverflow, StackUnderflow

# Classes
class RegisterFile(object):
    """
    V0-VF, the address register I, the program counter and the call stack.

    These are kept apart from the memory image, nothing here is addressable by the program.
    """
    def __init__(self):
        self.v = array.array("B", (0,) * NUM_REGISTERS)
        self.stack = array.array("H", (0,) * STACK_DEPTH)

        # These are all initialized in reset() but are here so PyLint isn't confused.
        # pylint: disable=invalid-name
        self.i = 0x0000
        self.pc = PROGRAM_START
        self.sp = 0
        # pylint: enable=invalid-name

        self.reset()

    def reset(self):
        """ Zero the registers and stack and point PC at the start of the program. """
        for index in range(NUM_REGISTERS):
            self.v[index] = 0
        for index in range(STACK_DEPTH):
            self.stack[index] = 0

        self.i = 0x0000
        self.pc = PROGRAM_START
        self.sp = 0

    def __getitem__(self, index):
        return self.v[index]

    def __setitem__(self, index, value):
        self.v[index] = value & 0xFF

    @property
    def vf(self):
        """ Returns the flag register. """
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value):
        """ Sets the flag register. """
        self.v[FLAG_REGISTER] = value & 0xFF

    # Stack.
    @property
    def depth(self):
        """ Returns the number of return addresses on the stack. """
        return self.sp

    def push(self, address):
        """ Push a return address, raising StackOverflow if the stack is full. """
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(self.pc)
        self.stack[self.sp] = address & 0xFFFF
        self.sp += 1

    def pop(self):
        """ Pop a return address, raising StackUnderflow if the stack is empty. """
        if self.sp == 0:
            raise StackUnderflow(self.pc)
        self.sp -= 1
        return self.stack[self.sp]

    def call_stack(self):
        """ Returns the active return addresses, oldest first. """
        return self.stack[:self.sp].tolist()
