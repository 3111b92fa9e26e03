#!/usr/bin/env python

"""
pyc8 - Main application for running a CHIP-8 ROM.
"""

# Standard library imports
import os
import sys
import signal
from optparse import OptionParser

# PyC8 imports
from pyc8.constants import TIMER_FREQUENCY
from pyc8.cpu import Quirks
from pyc8.debugger import Debugger
from pyc8.display import PygameDisplay, PALETTES, DEFAULT_SCALE
from pyc8.exceptions import PyC8Exception
from pyc8.machine import Chip8
from pyc8.speaker import PygameBuzzer
from pyc8.ui import PygameManager

# Pygame imports
import pygame

# Logging setup
import logging
log = logging.getLogger("pyc8")

# Constants
DEFAULT_INSTRUCTIONS_PER_FRAME = 11

# Functions
def parse_cmdline(argv = None):
    """ Parse the command line arguments. """
    parser = OptionParser(usage = "%prog [options] ROM")
    parser.add_option("--debug", action = "store_true", dest = "debug",
                      help = "Enable DEBUG log level and the interactive debugger.")
    parser.add_option("--speed", action = "store", type = "int", dest = "speed", default = DEFAULT_INSTRUCTIONS_PER_FRAME,
                      help = "Instructions executed per 60Hz frame, default: %d." % DEFAULT_INSTRUCTIONS_PER_FRAME)
    parser.add_option("--scale", action = "store", type = "int", dest = "scale", default = DEFAULT_SCALE,
                      help = "Size of a CHIP-8 pixel on screen, default: %d." % DEFAULT_SCALE)
    parser.add_option("--palette", action = "store", dest = "palette", default = "white",
                      help = "Display colors, one of: %s." % ", ".join(sorted(PALETTES)))
    parser.add_option("--seed", action = "store", type = "int", dest = "seed",
                      help = "Seed for the RND instruction.")
    parser.add_option("--shift-quirk", action = "store_true", dest = "shift_quirk", default = False,
                      help = "8XY6/8XYE shift VY into VX like the COSMAC VIP.")
    parser.add_option("--load-store-quirk", action = "store_true", dest = "load_store_quirk", default = False,
                      help = "FX55/FX65 increment I like the COSMAC VIP.")
    parser.add_option("--vf-reset-quirk", action = "store_true", dest = "vf_reset_quirk", default = False,
                      help = "8XY1/8XY2/8XY3 clear VF like the COSMAC VIP.")
    parser.add_option("--key-wait-quirk", action = "store_true", dest = "key_wait_quirk", default = False,
                      help = "FX0A only accepts a key pressed after the wait began.")
    parser.add_option("--break", action = "append", dest = "breakpoints", default = [],
                      help = "Hex address to break at, may be repeated.")
    parser.add_option("--trace", action = "store", dest = "trace",
                      help = "File to write a per-instruction trace to.")
    parser.add_option("--no-sound", action = "store_false", dest = "sound", default = True,
                      help = "Disable the buzzer.")
    parser.add_option("--log-file", action = "store", dest = "log_file",
                      help = "File to output debugging log.")
    parser.add_option("--log-filter", action = "store", dest = "log_filter",
                      help = "Log filter to apply to stderr handler.")
    options, args = parser.parse_args(argv)

    if len(args) != 1:
        parser.error("exactly one ROM file is required")
    if options.palette not in PALETTES:
        parser.error("unknown palette: %r" % options.palette)
    if options.speed < 1:
        parser.error("--speed must be at least 1")

    return options, args

def setup_logging(options):
    """ Configure the root logger from the command line options. """
    log_level = logging.DEBUG if options.debug else logging.INFO
    log_formatter = logging.Formatter("%(asctime)s.%(msecs)03d %(name)s(%(levelname)s): %(message)s", "%m/%d %H:%M:%S")
    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(log_formatter)
    if options.log_filter:
        stderr_handler.addFilter(logging.Filter(options.log_filter))
    root_logger = logging.root
    root_logger.setLevel(log_level)
    root_logger.addHandler(stderr_handler)

    if options.log_file:
        log.addHandler(logging.FileHandler(options.log_file))

def run_frame(machine, stepper, instructions):
    """ Run one 60Hz frame: a burst of instructions followed by one timer tick. """
    for _ in range(instructions):
        stepper.step()
        if machine.paused:
            break
    machine.tick_timer()

def main(argv = None):
    """ Main application that runs the PyC8 machine. """
    options, args = parse_cmdline(argv)
    setup_logging(options)

    log.info("PyC8 oh hai")

    quirks = Quirks(
        shift_uses_vy = options.shift_quirk,
        load_store_increments_i = options.load_store_quirk,
        logic_resets_vf = options.vf_reset_quirk,
        key_wait_needs_new_press = options.key_wait_quirk,
    )
    log.debug("quirks = %r", quirks)

    buzzer = PygameBuzzer()
    if options.sound:
        buzzer.init()

    machine = Chip8(quirks = quirks, seed = options.seed, sound_changed_callback = buzzer.set_active)
    try:
        machine.load_rom_file(args[0])
    except (IOError, PyC8Exception):
        log.exception("Unable to load ROM: %s", args[0])
        return 1

    debugger = Debugger(machine)
    for breakpoint in options.breakpoints:
        debugger.breakpoints.append(int(breakpoint, 16))

    if options.debug:
        signal.signal(signal.SIGINT, debugger.break_signal)

    use_debugger = options.debug or options.trace or debugger.breakpoints
    stepper = debugger if use_debugger else machine

    try:
        if options.trace:
            debugger.trace_fileptr = open(options.trace, "w")

        display = PygameDisplay(scale = options.scale, palette = PALETTES[options.palette])
        pygame_manager = PygameManager(machine, display)
        clock = pygame.time.Clock()

        while True:
            pygame_manager.poll()
            run_frame(machine, stepper, options.speed)
            display.draw(machine.framebuffer)
            clock.tick(TIMER_FREQUENCY)

    except PyC8Exception:
        debugger.dump_all(logging.ERROR)
        log.exception("Unhandled exception at PC 0x%03x", machine.regs.pc)

        # Stop in the debugger one last time so we can inspect the state of the system.
        if options.debug:
            debugger.enter_debugger()
        return 1

    finally:
        if debugger.trace_fileptr is not None:
            debugger.trace_fileptr.close()

if __name__ == "__main__":
    if os.environ.get("PYC8_PROFILING"):
        import cProfile
        cProfile.run("main()", sort = "time")
    else:
        sys.exit(main())
