"""CHIP-8 instruction semantics and the dispatch table that binds them.

Every operation takes the interpreter as its only argument and returns
the new value of the flag register VF, or None to leave VF untouched.
The interpreter applies the returned flag after the operation body has
run, so VF as a destination is always overwritten by the flag.

Reference: http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
"""

from .constants import FONT_START, FONT_GLYPH_SIZE
from .dispatch import DispatchTable
from .quirks import Quirks


# Clear the display.
def _00E0(vm):
    vm.display.clear()


# Return from a subroutine.
def _00EE(vm):
    vm.registers.pc = vm.stack.pop(vm.registers)


# Jump to location nnn.
def _1NNN(vm):
    vm.registers.pc = vm.state.nnn


# Call subroutine at nnn.
def _2NNN(vm):
    vm.stack.push(vm.registers, vm.registers.pc)
    vm.registers.pc = vm.state.nnn


# Skip next instruction if Vx = kk.
def _3XKK(vm):
    if vm.registers.v[vm.state.x] == vm.state.nn:
        vm.registers.pc += 2


# Skip next instruction if Vx != kk.
def _4XKK(vm):
    if vm.registers.v[vm.state.x] != vm.state.nn:
        vm.registers.pc += 2


# Skip next instruction if Vx = Vy.
def _5XY0(vm):
    v = vm.registers.v
    if v[vm.state.x] == v[vm.state.y]:
        vm.registers.pc += 2


# Set Vx = kk.
def _6XKK(vm):
    vm.registers.v[vm.state.x] = vm.state.nn


# Set Vx = Vx + kk, VF untouched.
def _7XKK(vm):
    v = vm.registers.v
    v[vm.state.x] = (v[vm.state.x] + vm.state.nn) & 0xFF


# Set Vx = Vy.
def _8XY0(vm):
    v = vm.registers.v
    v[vm.state.x] = v[vm.state.y]


def _logical_flag(vm):
    return 0 if vm.quirks & Quirks.LOGICAL else None


# Set Vx = Vx OR Vy.
def _8XY1(vm):
    v = vm.registers.v
    v[vm.state.x] |= v[vm.state.y]
    return _logical_flag(vm)


# Set Vx = Vx AND Vy.
def _8XY2(vm):
    v = vm.registers.v
    v[vm.state.x] &= v[vm.state.y]
    return _logical_flag(vm)


# Set Vx = Vx XOR Vy.
def _8XY3(vm):
    v = vm.registers.v
    v[vm.state.x] ^= v[vm.state.y]
    return _logical_flag(vm)


# Set Vx = Vx + Vy, set VF = carry.
def _8XY4(vm):
    v = vm.registers.v
    total = v[vm.state.x] + v[vm.state.y]
    v[vm.state.x] = total & 0xFF
    return 1 if total > 0xFF else 0


# Set Vx = Vx - Vy, set VF = 1 only for a strictly positive difference.
def _8XY5(vm):
    v = vm.registers.v
    difference = v[vm.state.x] - v[vm.state.y]
    v[vm.state.x] = difference & 0xFF
    return 1 if difference > 0 else 0


def _shift_source(vm):
    v = vm.registers.v
    if vm.quirks & Quirks.SHIFT:
        v[vm.state.x] = v[vm.state.y]
    return v[vm.state.x]


# Set Vx = Vx SHR 1, VF = bit shifted out.
def _8XY6(vm):
    value = _shift_source(vm)
    vm.registers.v[vm.state.x] = value >> 1
    return value & 1


# Set Vx = Vy - Vx, set VF = 1 only for a strictly positive difference.
def _8XY7(vm):
    v = vm.registers.v
    difference = v[vm.state.y] - v[vm.state.x]
    v[vm.state.x] = difference & 0xFF
    return 1 if difference > 0 else 0


# Set Vx = Vx SHL 1, VF = bit shifted out.
def _8XYE(vm):
    value = _shift_source(vm)
    vm.registers.v[vm.state.x] = (value << 1) & 0xFF
    return (value >> 7) & 1


# Skip next instruction if Vx != Vy.
def _9XY0(vm):
    v = vm.registers.v
    if v[vm.state.x] != v[vm.state.y]:
        vm.registers.pc += 2


# Set I = nnn
def _ANNN(vm):
    vm.registers.index = vm.state.nnn


# Jump to location nnn + V0 (legacy) or nnn + Vx.
def _BNNN(vm):
    v = vm.registers.v
    offset = v[0] if vm.quirks & Quirks.JUMP_OFFSET else v[vm.state.x]
    vm.registers.pc = vm.state.nnn + offset


# Set Vx = random byte AND kk.
def _CXKK(vm):
    vm.registers.v[vm.state.x] = vm.rng.randint(0, 0xFF) & vm.state.nn


# Draw an n-row sprite from I at (Vx, Vy), set VF = collision.
def _DXYN(vm):
    display = vm.display
    width, height = display.width, display.height
    clip = vm.quirks & Quirks.DRAW
    v = vm.registers.v

    origin_x = v[vm.state.x] & (width - 1)
    origin_y = v[vm.state.y] & (height - 1)
    collision = False

    for row in range(vm.state.n):
        y = origin_y + row
        if clip and y >= height:
            continue
        y &= height - 1

        # sprite rows are bit packed columns, msb first
        sprite = vm.memory.read_byte(vm.registers.index + row)
        for column in range(8):
            bit = (sprite >> (7 - column)) & 1
            if not bit:
                continue
            x = origin_x + column
            if clip and x >= width:
                continue
            x &= width - 1
            collision |= display.toggle(x, y, bit)

    return 1 if collision else 0


# Skip next instruction if key with the value of Vx is pressed.
def _EX9E(vm):
    if vm.input.keys[vm.registers.v[vm.state.x] & 0xF]:
        vm.registers.pc += 2


# Skip next instruction if key with the value of Vx is not pressed.
def _EXA1(vm):
    if not vm.input.keys[vm.registers.v[vm.state.x] & 0xF]:
        vm.registers.pc += 2


# Set Vx = delay timer value.
def _FX07(vm):
    vm.registers.v[vm.state.x] = vm.timers.delay


# Wait for a key release, store the value of the key in Vx.
#
# Runs every step while waiting; the first key whose state changed since
# the previous step is latched into Vx, and only a release ends the wait.
def _FX0A(vm):
    keys, previous = vm.input.keys, vm.input.previous_keys
    released = False
    for key, (now, before) in enumerate(zip(keys, previous)):
        if now != before:
            vm.registers.v[vm.state.x] = key
            released = not now
            break
    vm.waiting_for_key = not released


# Set delay timer = Vx.
def _FX15(vm):
    vm.timers.delay = vm.registers.v[vm.state.x]


# Set sound timer = Vx.
def _FX18(vm):
    vm.timers.sound = vm.registers.v[vm.state.x]


# Set I = I + Vx, VF = 1 past the 12-bit address space.
def _FX1E(vm):
    total = vm.registers.index + vm.registers.v[vm.state.x]
    vm.registers.index = total & 0xFFFF
    return 1 if total > 0xFFF else 0


# Advance I by the offset of the font glyph for the low nibble of Vx.
def _FX29(vm):
    glyph = (vm.registers.v[vm.state.x] & 0xF) * FONT_GLYPH_SIZE
    vm.registers.index = (vm.registers.index + FONT_START + glyph) & 0xFFFF


# Store BCD representation of Vx in memory locations I, I+1, and I+2.
def _FX33(vm):
    value = vm.registers.v[vm.state.x]
    vm.memory.write_block(vm.registers.index, [
        (value % 1000) // 100,
        (value % 100) // 10,
        value % 10,
    ])


def _advance_index(vm):
    if vm.quirks & Quirks.STORE_LOAD:
        vm.registers.index = (vm.registers.index + vm.state.x + 1) & 0xFFFF


# Store registers V0 through Vx in memory starting at location I.
def _FX55(vm):
    vm.memory.write_block(vm.registers.index, vm.registers.v[:vm.state.x + 1])
    _advance_index(vm)


# Read registers V0 through Vx from memory starting at location I.
def _FX65(vm):
    count = vm.state.x + 1
    vm.registers.v[:count] = vm.memory.read_block(vm.registers.index, count)
    _advance_index(vm)


# (family, key, mask, operation)
INSTRUCTIONS = [
    (0x0, 0xE0, 0x00FF, _00E0),
    (0x0, 0xEE, 0x00FF, _00EE),
    (0x1, 0x00, 0x0000, _1NNN),
    (0x2, 0x00, 0x0000, _2NNN),
    (0x3, 0x00, 0x0000, _3XKK),
    (0x4, 0x00, 0x0000, _4XKK),
    (0x5, 0x00, 0x0000, _5XY0),
    (0x6, 0x00, 0x0000, _6XKK),
    (0x7, 0x00, 0x0000, _7XKK),
    (0x8, 0x00, 0x000F, _8XY0),
    (0x8, 0x01, 0x000F, _8XY1),
    (0x8, 0x02, 0x000F, _8XY2),
    (0x8, 0x03, 0x000F, _8XY3),
    (0x8, 0x04, 0x000F, _8XY4),
    (0x8, 0x05, 0x000F, _8XY5),
    (0x8, 0x06, 0x000F, _8XY6),
    (0x8, 0x07, 0x000F, _8XY7),
    (0x8, 0x0E, 0x000F, _8XYE),
    (0x9, 0x00, 0x000F, _9XY0),
    (0xA, 0x00, 0x0000, _ANNN),
    (0xB, 0x00, 0x0000, _BNNN),
    (0xC, 0x00, 0x0000, _CXKK),
    (0xD, 0x00, 0x0000, _DXYN),
    (0xE, 0x9E, 0x00FF, _EX9E),
    (0xE, 0xA1, 0x00FF, _EXA1),
    (0xF, 0x07, 0x00FF, _FX07),
    (0xF, 0x0A, 0x00FF, _FX0A),
    (0xF, 0x15, 0x00FF, _FX15),
    (0xF, 0x18, 0x00FF, _FX18),
    (0xF, 0x1E, 0x00FF, _FX1E),
    (0xF, 0x29, 0x00FF, _FX29),
    (0xF, 0x33, 0x00FF, _FX33),
    (0xF, 0x55, 0x00FF, _FX55),
    (0xF, 0x65, 0x00FF, _FX65),
]


def build_dispatch_table() -> DispatchTable:
    table = DispatchTable()
    for family, key, mask, operation in INSTRUCTIONS:
        table.add(family, key, mask, operation)
    return table.freeze()
