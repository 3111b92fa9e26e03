import unittest

from pyc8.timer import *

class TimerPairTests(unittest.TestCase):
    def setUp(self):
        self.callback_log = []
        self.timers = TimerPair(self.callback_log.append)
        
    def test_initial_state(self):
        self.assertEqual(self.timers.delay, 0)
        self.assertEqual(self.timers.sound, 0)
        self.assertFalse(self.timers.sound_active)
        
    def test_tick_decrements(self):
        self.timers.delay = 3
        self.timers.sound = 2
        self.timers.tick()
        self.assertEqual(self.timers.delay, 2)
        self.assertEqual(self.timers.sound, 1)
        
    def test_tick_stops_at_zero(self):
        self.timers.delay = 1
        for _ in range(5):
            self.timers.tick()
        self.assertEqual(self.timers.delay, 0)
        self.assertEqual(self.timers.sound, 0)
        
    def test_independent(self):
        self.timers.delay = 10
        self.timers.tick()
        self.assertEqual(self.timers.delay, 9)
        self.assertEqual(self.timers.sound, 0)
        
    def test_values_are_bytes(self):
        self.timers.delay = 0x1FF
        self.assertEqual(self.timers.delay, 0xFF)
        
    def test_sound_callback(self):
        self.timers.sound = 2
        self.assertEqual(self.callback_log, [True])
        self.timers.tick()
        self.assertEqual(self.callback_log, [True])
        self.timers.tick()
        self.assertEqual(self.callback_log, [True, False])
        self.timers.tick()
        self.assertEqual(self.callback_log, [True, False])
        
    def test_reset(self):
        self.timers.delay = 5
        self.timers.sound = 5
        self.timers.reset()
        self.assertEqual(self.timers.delay, 0)
        self.assertEqual(self.timers.sound, 0)
        self.assertEqual(self.callback_log, [True, False])
        
    def test_no_callback(self):
        timers = TimerPair()
        timers.sound = 1
        timers.tick()
        self.assertEqual(timers.sound, 0)
