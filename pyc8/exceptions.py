"""
pyc8.exceptions - PyC8-specific exceptions.
"""

# Classes
class PyC8Exception(Exception):
    """ Base class for all PyC8 exceptions. """
    
class RomTooLarge(PyC8Exception):
    """ Exception raised when a program doesn't fit in the memory above 0x200. """
    def __init__(self, size, capacity):
        super(RomTooLarge, self).__init__()
        self.size = size
        self.capacity = capacity
        
    def __str__(self):
        return "ROM too large: %d bytes, only %d available" % (self.size, self.capacity)
        
class InvalidOpcodeException(PyC8Exception):
    """ Exception raised when an invalid opcode is encountered. """
    def __init__(self, opcode, pc):
        super(InvalidOpcodeException, self).__init__()
        self.opcode = opcode
        self.pc = pc
        
    def __str__(self):
        return "Invalid opcode: 0x%04x at PC 0x%03x" % (self.opcode, self.pc)
        
class StackOverflow(PyC8Exception):
    """ Exception raised when CALL is executed with a full stack. """
    def __init__(self, pc):
        super(StackOverflow, self).__init__()
        self.pc = pc
        
    def __str__(self):
        return "Stack overflow at PC 0x%03x" % self.pc
        
class StackUnderflow(PyC8Exception):
    """ Exception raised when RET is executed with an empty stack. """
    def __init__(self, pc):
        super(StackUnderflow, self).__init__()
        self.pc = pc
        
    def __str__(self):
        return "Stack underflow at PC 0x%03x" % self.pc
        
class OutOfBoundsFetch(PyC8Exception):
    """ Exception raised when an instruction is fetched from outside of memory. """
    def __init__(self, address):
        super(OutOfBoundsFetch, self).__init__()
        self.address = address
        
    def __str__(self):
        return "Out of bounds fetch at address 0x%04x" % self.address
        
class OutOfBoundsAccess(OutOfBoundsFetch):
    """ Exception raised when an instruction reads or writes data outside of memory. """
    def __str__(self):
        return "Out of bounds access at address 0x%04x" % self.address
