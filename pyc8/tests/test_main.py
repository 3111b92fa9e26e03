import os
import shutil
import tempfile
import unittest

import pyc8.__main__ as main_module

from pyc8.__main__ import *
from pyc8.debugger import Debugger
from pyc8.tests.utils import get_test_file, machine_with_program

class CommandLineTests(unittest.TestCase):
    def test_defaults(self):
        options, args = parse_cmdline(["game.ch8"])
        self.assertEqual(args, ["game.ch8"])
        self.assertEqual(options.speed, DEFAULT_INSTRUCTIONS_PER_FRAME)
        self.assertEqual(options.palette, "white")
        self.assertFalse(options.shift_quirk)
        self.assertFalse(options.load_store_quirk)
        self.assertFalse(options.vf_reset_quirk)
        self.assertFalse(options.key_wait_quirk)
        self.assertTrue(options.sound)
        self.assertEqual(options.breakpoints, [])
        
    def test_options(self):
        options, _args = parse_cmdline([
            "--speed", "20", "--seed", "7", "--shift-quirk", "--break", "2a0", "--break", "300", "game.ch8",
        ])
        self.assertEqual(options.speed, 20)
        self.assertEqual(options.seed, 7)
        self.assertTrue(options.shift_quirk)
        self.assertEqual(options.breakpoints, ["2a0", "300"])
        
    def test_rom_required(self):
        with self.assertRaises(SystemExit):
            parse_cmdline([])
            
    def test_bad_palette(self):
        with self.assertRaises(SystemExit):
            parse_cmdline(["--palette", "plaid", "game.ch8"])
            
class RunFrameTests(unittest.TestCase):
    def test_runs_instructions_then_ticks(self):
        machine = machine_with_program(0x6A05, 0xFA15, 0x7001, 0x1204)
        run_frame(machine, machine, 10)
        self.assertEqual(machine.regs[0], 4)
        self.assertEqual(machine.delay_timer_value(), 4)
        
    def test_stops_early_on_key_wait(self):
        machine = machine_with_program(0x6A02, 0xFA15, 0xF10A)
        run_frame(machine, Debugger(machine), 10)
        self.assertTrue(machine.paused)
        self.assertEqual(machine.regs.pc, 0x204)
        self.assertEqual(machine.delay_timer_value(), 1)
        
class DisplayFailure(Exception):
    pass
    
class FailingDisplay(object):
    def __init__(self, *args, **kwargs):
        raise DisplayFailure("no video device")
        
class RecordingDebugger(Debugger):
    instances = []
    
    def __init__(self, machine):
        super(RecordingDebugger, self).__init__(machine)
        self.instances.append(self)
        
class MainStartupTests(unittest.TestCase):
    def setUp(self):
        self.tempdir = tempfile.mkdtemp()
        RecordingDebugger.instances = []
        
        # Hijack the module globals so main() never touches Pygame or the root logger.
        self.saved = (main_module.PygameDisplay, main_module.Debugger, main_module.setup_logging)
        main_module.PygameDisplay = FailingDisplay
        main_module.Debugger = RecordingDebugger
        main_module.setup_logging = lambda options: None
        
    def tearDown(self):
        main_module.PygameDisplay, main_module.Debugger, main_module.setup_logging = self.saved
        shutil.rmtree(self.tempdir)
        
    def test_trace_file_closed_when_display_fails(self):
        trace = os.path.join(self.tempdir, "trace.log")
        with self.assertRaises(DisplayFailure):
            main(["--no-sound", "--trace", trace, get_test_file(self, "romtest.bin")])
            
        self.assertEqual(len(RecordingDebugger.instances), 1)
        self.assertTrue(RecordingDebugger.instances[0].trace_fileptr.closed)
        self.assertTrue(os.path.exists(trace))
        
    def test_missing_rom(self):
        self.assertEqual(main(["--no-sound", os.path.join(self.tempdir, "missing.ch8")]), 1)
