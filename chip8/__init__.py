"""CHIP-8 / S-CHIP / XO-CHIP interpreter core."""

from .constants import (
    MEMORY_SIZE, PROGRAM_START, PROGRAM_CAPACITY, DISPLAY_WIDTH, DISPLAY_HEIGHT,
    KEY_COUNT, FONT, FONT_START, TIMER_PERIOD,
)
from .errors import (
    Chip8Error, UnimplementedOpcode, StackOverflow, StackUnderflow,
    MemoryAccessError, ProgramTooLarge, DispatchError,
)
from .quirks import Quirks, PRESETS
from .interpreter import Interpreter

__version__ = '0.1.0'
