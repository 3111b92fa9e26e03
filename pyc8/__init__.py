"""
pyc8 - A CHIP-8 virtual machine.
"""
