import unittest

from pyc8.framebuffer import *

class FramebufferTests(unittest.TestCase):
    def setUp(self):
        self.fb = Framebuffer()
        
    def count_set(self):
        return sum(self.fb.pixels)
        
    def test_initial_state(self):
        self.assertEqual(len(self.fb.pixels), 64 * 32)
        self.assertEqual(self.count_set(), 0)
        
    def test_snapshot_shape(self):
        snapshot = self.fb.snapshot()
        self.assertEqual(len(snapshot), 32)
        for row in snapshot:
            self.assertEqual(len(row), 64)
            self.assertFalse(any(row))
            
    def test_snapshot_is_a_copy(self):
        snapshot = self.fb.snapshot()
        self.fb.draw_sprite(0, 0, [0x80])
        self.assertFalse(snapshot[0][0])
        self.assertTrue(self.fb.snapshot()[0][0])
        
    def test_draw_sprite_bits(self):
        collision = self.fb.draw_sprite(10, 5, [0xA5])
        self.assertFalse(collision)
        row = [self.fb.get_pixel(x, 5) for x in range(10, 18)]
        self.assertEqual(row, [True, False, True, False, False, True, False, True])
        self.assertEqual(self.count_set(), 4)
        
    def test_draw_sprite_twice_restores(self):
        glyph = [0xF0, 0x90, 0x90, 0x90, 0xF0]
        self.assertFalse(self.fb.draw_sprite(3, 4, glyph))
        self.assertTrue(self.fb.draw_sprite(3, 4, glyph))
        self.assertEqual(self.count_set(), 0)
        
    def test_collision_only_when_pixel_cleared(self):
        self.fb.draw_sprite(0, 0, [0x0F])
        self.assertFalse(self.fb.draw_sprite(0, 0, [0xF0]))
        self.assertTrue(self.fb.draw_sprite(0, 0, [0x01]))
        
    def test_pixels_wrap_around_edges(self):
        self.fb.draw_sprite(60, 31, [0xFF, 0xFF])
        for x in (60, 61, 62, 63, 0, 1, 2, 3):
            self.assertTrue(self.fb.get_pixel(x, 31), x)
            self.assertTrue(self.fb.get_pixel(x, 0), x)
        self.assertEqual(self.count_set(), 16)
        
    def test_origin_wraps(self):
        self.fb.draw_sprite(64 + 2, 32 + 1, [0x80])
        self.assertTrue(self.fb.get_pixel(2, 1))
        
    def test_empty_sprite(self):
        self.fb.dirty = False
        self.assertFalse(self.fb.draw_sprite(0, 0, []))
        self.assertFalse(self.fb.dirty)
        
    def test_clear(self):
        self.fb.draw_sprite(0, 0, [0xFF] * 8)
        self.fb.dirty = False
        self.fb.clear()
        self.assertEqual(self.count_set(), 0)
        self.assertTrue(self.fb.dirty)
        
    def test_str(self):
        self.fb.draw_sprite(0, 0, [0xC0])
        lines = str(self.fb).split("\n")
        self.assertEqual(len(lines), 32)
        self.assertEqual(lines[0], "##" + "." * 62)
