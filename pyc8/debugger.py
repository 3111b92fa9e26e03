"""
pyc8.debugger - Debugger module for PyC8.
"""

# Standard library imports
import re
import sys
from collections import Counter

# PyC8 imports
from pyc8.constants import NUM_REGISTERS
from pyc8.decoder import disassemble
from pyc8.exceptions import PyC8Exception

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
GDB_EXAMINE_REGEX = re.compile("^x\\/(\\d+)([x])([bw])$")
RETURN_OPCODE = 0x00EE

# Classes
class Debugger(object):
    """ Interactive debugger for PyC8. """
    def __init__(self, machine):
        self.machine = machine

        self.breakpoints = []
        self.single_step = False
        self.debugger_shortcut = []
        self.dump_enabled = False
        self.step_out = False

        self.location_counter = Counter()
        self.instruction_counter = Counter()
        self.trace_fileptr = None

    @property
    def regs(self):
        return self.machine.regs

    # ********** Debugger functions. **********
    def step(self):
        """ Wraps the machine step() to print info and/or pause execution. """
        # Nothing to look at while the program sits on a key wait.
        if self.machine.paused:
            return self.machine.step()

        if self.dump_enabled:
            self.dump_all()

        next_instruction = self.peek_instruction()
        if self.dump_enabled:
            log.debug("next_instruction = 0x%04x (%s)", next_instruction, disassemble(next_instruction))

        if self.trace_fileptr:
            self.trace_fileptr.write("\t".join(
                ["%03x" % self.regs.pc, "%04x" % next_instruction, "I=%03x" % self.regs.i] +
                ["%02x" % self.regs[index] for index in range(NUM_REGISTERS)] +
                [disassemble(next_instruction)]
            ) + "\n")

        # Check if we are trying to step out of a CALL-ed function.
        if self.step_out and next_instruction == RETURN_OPCODE:
            log.debug("Return detected!")
            # At this point we want to drop to the debugger and not step out any longer.
            self.step_out = False
            self.single_step = True

        if self.should_break():
            self.enter_debugger()

        self.location_counter.update({self.regs.pc : 1})
        self.instruction_counter.update({next_instruction & 0xF000 : 1})
        return self.machine.step()

    def dump_all(self, level = logging.DEBUG):
        """ Dump all registers, timers and the stack. """
        self.dump_regs(level)
        log.log(level, "PC = 0x%03x  I = 0x%03x  SP = %d", self.regs.pc, self.regs.i, self.regs.sp)
        log.log(level, "DT = 0x%02x  ST = 0x%02x  %s",
                self.machine.delay_timer_value(), self.machine.sound_timer_value(),
                "PAUSED on V%X" % self.machine.keyboard.target_register if self.machine.paused else "RUNNING",
                )
        self.dump_stack(level)

    def dump_regs(self, level = logging.DEBUG):
        """ Dump V0-VF to the log, eight per line. """
        for base in (0, 8):
            log.log(level, "  ".join(["V%X = 0x%02x" % (index, self.regs[index]) for index in range(base, base + 8)]))

    def dump_stack(self, level = logging.DEBUG):
        """ Dump the call stack. """
        for depth, address in enumerate(self.regs.call_stack()):
            log.log(level, "stack[%d] = 0x%03x", depth, address)

    def should_break(self):
        """ Return True if we should break now. """
        return self.single_step or self.regs.pc in self.breakpoints

    def peek_instruction(self):
        """ Return the opcode at PC without executing it, 0 if PC is out of range. """
        try:
            return self.machine.memory.read16(self.regs.pc)
        except PyC8Exception:
            return 0x0000

    def break_signal(self, _signum, _frame):
        """ Control-C handler to enter single-step mode. """
        print("Control-C")
        self.single_step = True

    def enter_debugger(self):
        """ Interactive debugger menu. """
        while True:
            opcode = self.peek_instruction()
            print("\n0x%03x: %04x  %s" % (self.regs.pc, opcode, disassemble(opcode)))
            if len(self.debugger_shortcut) != 0:
                print("[%s] >" % " ".join(self.debugger_shortcut), end=" ")
            else:
                print(">", end=" ")

            try:
                cmd = input().lower().split()
            except KeyboardInterrupt:
                print("^C")
                continue

            try:
                resume = self.process_command(cmd)
                if resume:
                    break
            except (ValueError, IndexError, PyC8Exception):
                log.exception("Error processing: %r", cmd)

    def process_command(self, cmd):
        """ Actually process the command from the user, returns True to resume execution. """
        if len(cmd) == 0 and len(self.debugger_shortcut) != 0:
            cmd = self.debugger_shortcut
            print("Using: %s" % " ".join(cmd))
        else:
            self.debugger_shortcut = cmd

        if len(cmd) == 0:
            return False

        if len(cmd) == 1 and cmd[0] in ("continue", "c"):
            self.single_step = False
            return True

        elif len(cmd) == 1 and cmd[0] in ("step", "s"):
            self.single_step = True
            return True

        elif len(cmd) == 1 and cmd[0] in ("quit", "q"):
            sys.exit(0)

        elif len(cmd) == 1 and cmd[0] in ("dump", "d"):
            self.dump_all(logging.INFO)

        elif len(cmd) == 1 and cmd[0] in ("stack", "st"):
            self.dump_stack(logging.INFO)

        elif len(cmd) == 1 and cmd[0] in ("screen", "fb"):
            print(self.machine.framebuffer)

        elif len(cmd) == 3 and cmd[0] == "key":
            self.machine.set_key(int(cmd[1], 16), cmd[2] in ("down", "1", "on"))

        elif len(cmd) == 1 and cmd[0] == "ram-dump":
            with open("ram-dump.bin", "wb") as fileptr:
                fileptr.write(self.machine.memory.contents.tobytes())

        elif len(cmd) == 2 and cmd[0] == "trace":
            if cmd[1] == "on" and self.trace_fileptr is None:
                self.trace_fileptr = open("trace.log", "w")
            elif cmd[1] == "off" and self.trace_fileptr is not None:
                self.trace_fileptr.close()
                self.trace_fileptr = None
            else:
                print("Trace is %s." % ("off" if self.trace_fileptr is None else "on"))

        elif len(cmd) == 1 and cmd[0] in ("step-out", "out"):
            # Set the step out flag and disable single stepping so we run to the next return.
            self.step_out = True
            self.single_step = False
            return True

        elif len(cmd) == 2 and cmd[0] in ("lc", "location-counter"):
            if cmd[1] == "clear":
                self.location_counter.clear()
            else:
                for location, count in self.location_counter.most_common(int(cmd[1])):
                    print("location = 0x%03x, count = %d" % (location, count))

        elif len(cmd) == 2 and cmd[0] in ("ic", "instruction-counter"):
            if cmd[1] == "clear":
                self.instruction_counter.clear()
            else:
                for family, count in self.instruction_counter.most_common(int(cmd[1])):
                    print("family = 0x%x, count = %d" % (family >> 12, count))

        elif len(cmd) >= 2 and cmd[0] in ("dis", "disassemble"):
            address = int(cmd[1], 16)
            count = int(cmd[2]) if len(cmd) == 3 else 8
            for _ in range(count):
                opcode = self.machine.memory.read16(address)
                print("0x%03x: %04x  %s" % (address, opcode, disassemble(opcode)))
                address += 2

        elif len(cmd) >= 1 and cmd[0] == "info":
            self.debugger_shortcut = []
            if len(cmd) == 2 and cmd[1] in ("breakpoints", "break"):
                print("Breakpoints:")
                for breakpoint in self.breakpoints:
                    print("  0x%03x" % breakpoint)

        elif len(cmd) == 2 and cmd[0] == "break":
            self.debugger_shortcut = []
            self.breakpoints.append(int(cmd[1], 16))

        elif len(cmd) == 2 and cmd[0] == "clear":
            self.debugger_shortcut = []
            if cmd[1] == "all":
                self.breakpoints = []
            elif cmd[1] == "dump":
                self.dump_enabled = False
            else:
                self.breakpoints.remove(int(cmd[1], 16))

        elif len(cmd) >= 1 and cmd[0] == "set":
            self.debugger_shortcut = []
            if len(cmd) == 2 and cmd[1] == "dump":
                self.dump_enabled = True
                self.dump_all()

        elif len(cmd) >= 1 and cmd[0][0] == "x":
            return self.examine(cmd)

        else:
            print("i don't know what %r is." % " ".join(cmd))

        return False

    def examine(self, cmd):
        """ GDB style x/<count>x<b|w> <address> memory examine. """
        count = 1
        unit = "b"
        if len(cmd[0]) > 1:
            match = GDB_EXAMINE_REGEX.match(cmd[0])
            if match is None:
                print("invalid examine command: %r" % cmd[0])
                return False
            count = int(match.group(1))
            unit = match.group(3)

        if len(cmd) < 2:
            print("you need an address")
            return False
        address = int(cmd[1], 0)

        if unit == "b":
            data = self.machine.memory.read_block(address, count)
            ending_address = address + count
            text = " ".join("%02x" % item for item in data)
        else:
            data = [self.machine.memory.read16(addr) for addr in range(address, address + (count * 2), 2)]
            ending_address = address + (count * 2)
            text = " ".join("%04x" % item for item in data)

        self.debugger_shortcut = [cmd[0], "0x%03x" % ending_address]
        print("0x%03x:" % address, text)
        return False
