import io
import unittest

from pyc8.debugger import *
from pyc8.tests.utils import machine_with_program

class DebuggerTests(unittest.TestCase):
    def setUp(self):
        # 0x200: CALL 0x206, 0x202: LD V1, 0x11, 0x204: JP 0x204, 0x206: LD V0, 0x42, 0x208: RET
        self.machine = machine_with_program(0x2206, 0x6111, 0x1204, 0x6042, 0x00EE)
        self.debugger = Debugger(self.machine)
        
        # Hijack the interactive prompt.
        self.break_log = []
        self.debugger.enter_debugger = self.enter_debugger_testable
        
    def enter_debugger_testable(self):
        self.break_log.append(self.machine.regs.pc)
        
    def test_step_runs_machine(self):
        self.debugger.step()
        self.assertEqual(self.machine.regs.pc, 0x206)
        self.assertEqual(self.break_log, [])
        
    def test_breakpoint(self):
        self.debugger.breakpoints.append(0x206)
        for _ in range(4):
            self.debugger.step()
        self.assertEqual(self.break_log, [0x206])
        
    def test_single_step(self):
        self.debugger.single_step = True
        self.debugger.step()
        self.debugger.step()
        self.assertEqual(self.break_log, [0x200, 0x206])
        
    def test_step_out(self):
        self.debugger.step()
        self.debugger.step_out = True
        self.debugger.step()
        self.assertEqual(self.break_log, [])
        self.debugger.step()
        self.assertEqual(self.break_log, [0x208])
        self.assertTrue(self.debugger.single_step)
        self.assertFalse(self.debugger.step_out)
        
    def test_counters(self):
        for _ in range(5):
            self.debugger.step()
        self.assertEqual(self.debugger.location_counter[0x204], 1)
        self.assertEqual(self.debugger.instruction_counter[0x6000], 2)
        
    def test_trace(self):
        self.debugger.trace_fileptr = io.StringIO()
        self.debugger.step()
        line = self.debugger.trace_fileptr.getvalue()
        self.assertTrue(line.startswith("200\t2206\tI=000\t"))
        self.assertTrue(line.endswith("CALL 0x206\n"))
        
    def test_peek_instruction_out_of_range(self):
        self.machine.regs.pc = 0xFFF
        self.assertEqual(self.debugger.peek_instruction(), 0x0000)
        
    def test_paused_machine_is_not_traced(self):
        machine = machine_with_program(0xF00A)
        debugger = Debugger(machine)
        debugger.trace_fileptr = io.StringIO()
        debugger.step()
        debugger.step()
        self.assertEqual(len(debugger.trace_fileptr.getvalue().splitlines()), 1)
        
class DebuggerCommandTests(unittest.TestCase):
    def setUp(self):
        self.machine = machine_with_program(0x6A12, 0x00E0)
        self.debugger = Debugger(self.machine)
        
    def test_continue(self):
        self.debugger.single_step = True
        self.assertTrue(self.debugger.process_command(["c"]))
        self.assertFalse(self.debugger.single_step)
        
    def test_step(self):
        self.assertTrue(self.debugger.process_command(["s"]))
        self.assertTrue(self.debugger.single_step)
        
    def test_repeat_last_command(self):
        self.debugger.process_command(["s"])
        self.debugger.single_step = False
        self.assertTrue(self.debugger.process_command([]))
        self.assertTrue(self.debugger.single_step)
        
    def test_quit(self):
        with self.assertRaises(SystemExit):
            self.debugger.process_command(["q"])
            
    def test_breakpoints(self):
        self.assertFalse(self.debugger.process_command(["break", "2a0"]))
        self.debugger.process_command(["break", "300"])
        self.assertEqual(self.debugger.breakpoints, [0x2A0, 0x300])
        self.debugger.process_command(["clear", "2a0"])
        self.assertEqual(self.debugger.breakpoints, [0x300])
        self.debugger.process_command(["clear", "all"])
        self.assertEqual(self.debugger.breakpoints, [])
        
    def test_key(self):
        self.debugger.process_command(["key", "a", "down"])
        self.assertTrue(self.machine.keyboard.is_pressed(0xA))
        self.debugger.process_command(["key", "a", "up"])
        self.assertFalse(self.machine.keyboard.is_pressed(0xA))
        
    def test_set_and_clear_dump(self):
        self.debugger.process_command(["set", "dump"])
        self.assertTrue(self.debugger.dump_enabled)
        self.debugger.process_command(["clear", "dump"])
        self.assertFalse(self.debugger.dump_enabled)
        
    def test_step_out(self):
        self.assertTrue(self.debugger.process_command(["out"]))
        self.assertTrue(self.debugger.step_out)
        
    def test_examine_sets_shortcut(self):
        self.debugger.process_command(["x/4xb", "0x200"])
        self.assertEqual(self.debugger.debugger_shortcut, ["x/4xb", "0x204"])
        self.debugger.process_command(["x/2xw", "0x200"])
        self.assertEqual(self.debugger.debugger_shortcut, ["x/2xw", "0x204"])
        
    def test_dump_all(self):
        self.machine.regs[0xA] = 0x12
        with self.assertLogs("pyc8.debugger", level = "INFO") as context:
            self.debugger.process_command(["d"])
        self.assertIn("VA = 0x12", "\n".join(context.output))
