"""Compatibility flags selecting legacy instruction behavior.

The legacy bits reproduce the original COSMAC VIP interpreter; the
presets mirror the combinations used by S-CHIP and XO-CHIP programs.
See https://games.gulrak.net/cadmium/chip8-opcode-table.html
"""

import enum


class Quirks(enum.IntFlag):
    NONE = 0

    # 8XY6/8XYE copy VY into VX before shifting
    SHIFT = 1 << 0
    # FX55/FX65 leave I pointing past the last register
    STORE_LOAD = 1 << 1
    # BNNN jumps to NNN + V0 instead of NNN + VX
    JUMP_OFFSET = 1 << 2
    # 8XY1/8XY2/8XY3 reset VF
    LOGICAL = 1 << 3
    # display wait, carried but not modelled
    DISPLAY_SYNC = 1 << 4
    # DXYN clips at the screen edge instead of wrapping
    DRAW = 1 << 5

    ALL = SHIFT | STORE_LOAD | JUMP_OFFSET | LOGICAL | DISPLAY_SYNC | DRAW

    # operation modes
    CHIP8 = ALL
    SCHIP = DRAW
    XOCHIP = STORE_LOAD | JUMP_OFFSET | SHIFT


PRESETS = {
    'chip8': Quirks.CHIP8,
    'schip': Quirks.SCHIP,
    'xochip': Quirks.XOCHIP,
}
