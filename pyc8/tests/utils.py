"""
pyc8.tests.utils - Helpers for writing unit tests.
"""

import os
import inspect

from pyc8.helpers import opcodes_to_bytes
from pyc8.machine import Chip8

def get_test_file(suite, filename):
    """ Get the path to a test file for a given suite. """
    return os.path.join(
        os.path.dirname(inspect.getfile(suite.__class__)),
        "files",
        filename,
    )

def machine_with_program(*opcodes, **kwargs):
    """ Returns a fresh machine with the supplied opcodes loaded at 0x200. """
    machine = Chip8(**kwargs)
    machine.load_program(opcodes_to_bytes(opcodes))
    return machine

class MachineStateRecorder(object):
    """ Captures everything a faulting instruction is not allowed to change. """
    def __init__(self, machine):
        self.state = self.capture(machine)

    @staticmethod
    def capture(machine):
        return (
            machine.regs.v.tolist(),
            machine.regs.i,
            machine.regs.pc,
            machine.regs.call_stack(),
            machine.memory.contents.tolist(),
            machine.framebuffer_snapshot(),
            machine.delay_timer_value(),
            machine.sound_timer_value(),
            machine.paused,
        )

    def unchanged(self, machine):
        return self.capture(machine) == self.state
