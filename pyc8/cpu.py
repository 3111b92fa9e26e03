"""
pyc8.cpu - CHIP-8 CPU module for PyC8.
"""

# Standard library imports
import random

# PyC8 imports
from pyc8.constants import FLAG_REGISTER
from pyc8.decoder import decode, disassemble
from pyc8.exceptions import PyC8Exception, InvalidOpcodeException
from pyc8.helpers import to_bcd

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
INSTRUCTION_SIZE = 2

# Classes
class StepOutcome(object):
    """ Result of a single call to CPU.step(). """
    ADVANCED = "advanced"
    PAUSED = "paused"

class Quirks(object):
    """
    Behaviors that historical interpreters disagree on.

    The defaults match the common modern interpreters; turn these on for ROMs written for
    the COSMAC VIP interpreter.
    """
    def __init__(self, shift_uses_vy = False, load_store_increments_i = False, logic_resets_vf = False,
                 key_wait_needs_new_press = False):
        # 8XY6/8XYE shift VY into VX instead of shifting VX in place.
        self.shift_uses_vy = shift_uses_vy

        # FX55/FX65 leave I pointing past the last register transferred.
        self.load_store_increments_i = load_store_increments_i

        # 8XY1/8XY2/8XY3 clear VF.
        self.logic_resets_vf = logic_resets_vf

        # FX0A ignores keys that were already held when the wait began.
        self.key_wait_needs_new_press = key_wait_needs_new_press

    def __repr__(self):
        return "<%s(shift_uses_vy=%r, load_store_increments_i=%r, logic_resets_vf=%r, key_wait_needs_new_press=%r)>" % (
            self.__class__.__name__, self.shift_uses_vy, self.load_store_increments_i, self.logic_resets_vf,
            self.key_wait_needs_new_press,
        )

class CPU(object):
    """ Fetches, decodes and executes CHIP-8 instructions against the machine components. """
    def __init__(self, memory, regs, framebuffer, keyboard, timers, quirks = None, rng = None):
        self.memory = memory
        self.regs = regs
        self.framebuffer = framebuffer
        self.keyboard = keyboard
        self.timers = timers
        self.quirks = quirks if quirks is not None else Quirks()
        self.rng = rng if rng is not None else random.Random()

        # Where PC goes after the current instruction, handlers adjust this instead of PC.
        self.next_pc = self.regs.pc

        # Fast instruction dispatch, keyed by the decoded instruction name.
        self.opcode_vector = {
            "cls" : self.opcode_cls,
            "ret" : self.opcode_ret,
            "jp" : self.opcode_jp,
            "call" : self.opcode_call,
            "se_vx_nn" : self.opcode_se_vx_nn,
            "sne_vx_nn" : self.opcode_sne_vx_nn,
            "se_vx_vy" : self.opcode_se_vx_vy,
            "ld_vx_nn" : self.opcode_ld_vx_nn,
            "add_vx_nn" : self.opcode_add_vx_nn,
            "ld_vx_vy" : self.opcode_ld_vx_vy,
            "or" : self.opcode_or,
            "and" : self.opcode_and,
            "xor" : self.opcode_xor,
            "add_vx_vy" : self.opcode_add_vx_vy,
            "sub" : self.opcode_sub,
            "shr" : self.opcode_shr,
            "subn" : self.opcode_subn,
            "shl" : self.opcode_shl,
            "sne_vx_vy" : self.opcode_sne_vx_vy,
            "ld_i" : self.opcode_ld_i,
            "jp_v0" : self.opcode_jp_v0,
            "rnd" : self.opcode_rnd,
            "drw" : self.opcode_drw,
            "skp" : self.opcode_skp,
            "sknp" : self.opcode_sknp,
            "ld_vx_dt" : self.opcode_ld_vx_dt,
            "ld_vx_k" : self.opcode_ld_vx_k,
            "ld_dt_vx" : self.opcode_ld_dt_vx,
            "ld_st_vx" : self.opcode_ld_st_vx,
            "add_i_vx" : self.opcode_add_i_vx,
            "ld_f_vx" : self.opcode_ld_f_vx,
            "ld_b_vx" : self.opcode_ld_b_vx,
            "ld_mem_vx" : self.opcode_ld_mem_vx,
            "ld_vx_mem" : self.opcode_ld_vx_mem,
        }

    @property
    def paused(self):
        """ True while a LD VX, K instruction is waiting for a key. """
        return self.keyboard.waiting

    def step(self):
        """
        Fetch and execute one instruction.

        While waiting for a key this returns StepOutcome.PAUSED without touching PC until the
        keyboard latch has a key for us. Any exception raised leaves the machine state as it
        was before the call.
        """
        if self.keyboard.waiting:
            return self.resume_key_wait()

        pc = self.regs.pc
        try:
            opcode = self.memory.read16(pc)
        except PyC8Exception as exc:
            log.error("%s", exc)
            raise

        try:
            instruction = decode(opcode, pc)
        except InvalidOpcodeException:
            self.signal_invalid_opcode(opcode, pc)

        self.next_pc = pc + INSTRUCTION_SIZE
        try:
            outcome = self.opcode_vector[instruction.name](instruction)
        except PyC8Exception as exc:
            log.error("%s executing %s", exc, disassemble(opcode))
            raise

        self.regs.pc = self.next_pc
        return outcome if outcome is not None else StepOutcome.ADVANCED

    def resume_key_wait(self):
        """ Complete a pending LD VX, K if a key has been pressed. """
        latched = self.keyboard.take_pending_key(accept_held = not self.quirks.key_wait_needs_new_press)
        if latched is None:
            return StepOutcome.PAUSED

        register, key = latched
        self.regs[register] = key
        self.regs.pc += INSTRUCTION_SIZE
        log.debug("Key 0x%x received in V%X, resuming at 0x%03x.", key, register, self.regs.pc)
        return StepOutcome.ADVANCED

    def signal_invalid_opcode(self, opcode, pc):
        """ Invalid opcode handler. """
        log.error("Invalid opcode: 0x%04x at PC 0x%03x", opcode, pc)
        raise InvalidOpcodeException(opcode, pc)

    def skip_if(self, condition):
        """ Skip the next instruction if condition is true. """
        if condition:
            self.next_pc += INSTRUCTION_SIZE

    # ********** Flow control opcodes. **********
    def opcode_cls(self, _instruction):
        """ 00E0 - CLS - Clear the display. """
        self.framebuffer.clear()

    def opcode_ret(self, _instruction):
        """ 00EE - RET - Return from a subroutine. """
        self.next_pc = self.regs.pop()
        log.debug("RET to 0x%03x", self.next_pc)

    def opcode_jp(self, instruction):
        """ 1NNN - JP addr - Jump to NNN. """
        self.next_pc = instruction.nnn

    def opcode_call(self, instruction):
        """ 2NNN - CALL addr - Push the return address and jump to NNN. """
        self.regs.push(self.next_pc)
        self.next_pc = instruction.nnn
        log.debug("CALL 0x%03x, depth %d", instruction.nnn, self.regs.depth)

    def opcode_jp_v0(self, instruction):
        """ BNNN - JP V0, addr - Jump to NNN + V0. """
        self.next_pc = instruction.nnn + self.regs[0]

    # ********** Conditional skip opcodes. **********
    def opcode_se_vx_nn(self, instruction):
        """ 3XNN - SE VX, NN - Skip if VX == NN. """
        self.skip_if(self.regs[instruction.x] == instruction.nn)

    def opcode_sne_vx_nn(self, instruction):
        """ 4XNN - SNE VX, NN - Skip if VX != NN. """
        self.skip_if(self.regs[instruction.x] != instruction.nn)

    def opcode_se_vx_vy(self, instruction):
        """ 5XY0 - SE VX, VY - Skip if VX == VY. """
        self.skip_if(self.regs[instruction.x] == self.regs[instruction.y])

    def opcode_sne_vx_vy(self, instruction):
        """ 9XY0 - SNE VX, VY - Skip if VX != VY. """
        self.skip_if(self.regs[instruction.x] != self.regs[instruction.y])

    def opcode_skp(self, instruction):
        """ EX9E - SKP VX - Skip if the key in VX is pressed. """
        self.skip_if(self.keyboard.is_pressed(self.regs[instruction.x]))

    def opcode_sknp(self, instruction):
        """ EXA1 - SKNP VX - Skip if the key in VX is not pressed. """
        self.skip_if(not self.keyboard.is_pressed(self.regs[instruction.x]))

    # ********** Register load opcodes. **********
    def opcode_ld_vx_nn(self, instruction):
        """ 6XNN - LD VX, NN """
        self.regs[instruction.x] = instruction.nn

    def opcode_add_vx_nn(self, instruction):
        """ 7XNN - ADD VX, NN - Wraps and leaves VF alone. """
        self.regs[instruction.x] = (self.regs[instruction.x] + instruction.nn) & 0xFF

    def opcode_ld_i(self, instruction):
        """ ANNN - LD I, addr """
        self.regs.i = instruction.nnn

    def opcode_rnd(self, instruction):
        """ CXNN - RND VX, NN - VX = random byte AND NN. """
        self.regs[instruction.x] = self.rng.randint(0, 0xFF) & instruction.nn

    # ********** ALU opcodes. **********
    def set_result_and_flag(self, register, result, flag):
        """ Store an ALU result, then VF so the flag wins if register is VF. """
        self.regs[register] = result & 0xFF
        self.regs[FLAG_REGISTER] = flag

    def opcode_ld_vx_vy(self, instruction):
        """ 8XY0 - LD VX, VY """
        self.regs[instruction.x] = self.regs[instruction.y]

    def _logical(self, instruction, value):
        """ Common handler for OR, AND and XOR. """
        self.regs[instruction.x] = value
        if self.quirks.logic_resets_vf:
            self.regs[FLAG_REGISTER] = 0

    def opcode_or(self, instruction):
        """ 8XY1 - OR VX, VY """
        self._logical(instruction, self.regs[instruction.x] | self.regs[instruction.y])

    def opcode_and(self, instruction):
        """ 8XY2 - AND VX, VY """
        self._logical(instruction, self.regs[instruction.x] & self.regs[instruction.y])

    def opcode_xor(self, instruction):
        """ 8XY3 - XOR VX, VY """
        self._logical(instruction, self.regs[instruction.x] ^ self.regs[instruction.y])

    def opcode_add_vx_vy(self, instruction):
        """ 8XY4 - ADD VX, VY - VF = carry. """
        result = self.regs[instruction.x] + self.regs[instruction.y]
        self.set_result_and_flag(instruction.x, result, 1 if result > 0xFF else 0)

    def opcode_sub(self, instruction):
        """ 8XY5 - SUB VX, VY - VX = VX - VY, VF = NOT borrow. """
        operand_a = self.regs[instruction.x]
        operand_b = self.regs[instruction.y]
        self.set_result_and_flag(instruction.x, operand_a - operand_b, 1 if operand_a >= operand_b else 0)

    def opcode_subn(self, instruction):
        """ 8XY7 - SUBN VX, VY - VX = VY - VX, VF = NOT borrow. """
        operand_a = self.regs[instruction.y]
        operand_b = self.regs[instruction.x]
        self.set_result_and_flag(instruction.x, operand_a - operand_b, 1 if operand_a >= operand_b else 0)

    def opcode_shr(self, instruction):
        """ 8XY6 - SHR VX {, VY} - VF = the bit shifted out. """
        value = self.regs[instruction.y if self.quirks.shift_uses_vy else instruction.x]
        self.set_result_and_flag(instruction.x, value >> 1, value & 0x01)

    def opcode_shl(self, instruction):
        """ 8XYE - SHL VX {, VY} - VF = the bit shifted out. """
        value = self.regs[instruction.y if self.quirks.shift_uses_vy else instruction.x]
        self.set_result_and_flag(instruction.x, value << 1, (value & 0x80) >> 7)

    # ********** Display opcodes. **********
    def opcode_drw(self, instruction):
        """ DXYN - DRW VX, VY, N - Draw an N byte sprite from I, VF = collision. """
        rows = self.memory.read_block(self.regs.i, instruction.n)
        collision = self.framebuffer.draw_sprite(self.regs[instruction.x], self.regs[instruction.y], rows)
        self.regs[FLAG_REGISTER] = 1 if collision else 0

    def opcode_ld_f_vx(self, instruction):
        """ FX29 - LD F, VX - Point I at the font glyph for the low nibble of VX. """
        self.regs.i = self.memory.font_address(self.regs[instruction.x])

    # ********** Timer opcodes. **********
    def opcode_ld_vx_dt(self, instruction):
        """ FX07 - LD VX, DT """
        self.regs[instruction.x] = self.timers.delay

    def opcode_ld_dt_vx(self, instruction):
        """ FX15 - LD DT, VX """
        self.timers.delay = self.regs[instruction.x]

    def opcode_ld_st_vx(self, instruction):
        """ FX18 - LD ST, VX """
        self.timers.sound = self.regs[instruction.x]

    # ********** Keyboard opcodes. **********
    def opcode_ld_vx_k(self, instruction):
        """ FX0A - LD VX, K - Pause until a key is pressed and store it in VX. """
        self.keyboard.begin_wait(instruction.x)
        self.next_pc = self.regs.pc
        log.debug("Waiting for a key for V%X at 0x%03x.", instruction.x, self.regs.pc)
        return StepOutcome.PAUSED

    # ********** Memory opcodes. **********
    def opcode_add_i_vx(self, instruction):
        """ FX1E - ADD I, VX """
        self.regs.i = (self.regs.i + self.regs[instruction.x]) & 0xFFFF

    def opcode_ld_b_vx(self, instruction):
        """ FX33 - LD B, VX - Store the BCD digits of VX at I, I+1 and I+2. """
        address = self.regs.i
        self.memory.check_range(address, 3)
        for offset, digit in enumerate(to_bcd(self.regs[instruction.x])):
            self.memory.write8(address + offset, digit)

    def opcode_ld_mem_vx(self, instruction):
        """ FX55 - LD [I], VX - Store V0 through VX starting at I. """
        address = self.regs.i
        self.memory.check_range(address, instruction.x + 1)
        for index in range(instruction.x + 1):
            self.memory.write8(address + index, self.regs[index])
        if self.quirks.load_store_increments_i:
            self.regs.i = (address + instruction.x + 1) & 0xFFFF

    def opcode_ld_vx_mem(self, instruction):
        """ FX65 - LD VX, [I] - Load V0 through VX starting at I. """
        address = self.regs.i
        for index, value in enumerate(self.memory.read_block(address, instruction.x + 1)):
            self.regs[index] = value
        if self.quirks.load_store_increments_i:
            self.regs.i = (address + instruction.x + 1) & 0xFFFF
