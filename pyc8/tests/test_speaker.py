import unittest

from pyc8.speaker import *

class SquareWaveTests(unittest.TestCase):
    def test_length(self):
        self.assertEqual(len(square_wave(440)), SAMPLE_RATE)
        
    def test_shape(self):
        data = square_wave(SAMPLE_RATE // 4, volume = 1.0)
        self.assertEqual(data[0:4].tolist(), [MAX_SHORT, MAX_SHORT, MIN_SHORT, MIN_SHORT])
        
    def test_invalid_frequency(self):
        with self.assertRaises(ValueError):
            square_wave(0)
            
class BuzzerTests(unittest.TestCase):
    def setUp(self):
        self.buzzer = PygameBuzzer()
        self.log = []
        self.buzzer.play = lambda: self.log.append("play")
        self.buzzer.stop = lambda: self.log.append("stop")
        
    def test_set_active(self):
        self.buzzer.set_active(True)
        self.buzzer.set_active(True)
        self.buzzer.set_active(False)
        self.buzzer.set_active(False)
        self.assertEqual(self.log, ["play", "stop"])
        
    def test_stop_without_sound(self):
        buzzer = PygameBuzzer()
        buzzer.stop()
        self.assertEqual(buzzer.sound, None)
