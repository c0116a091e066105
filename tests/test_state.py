import pytest

from chip8 import FONT, PROGRAM_START, PROGRAM_CAPACITY, MemoryAccessError, ProgramTooLarge
from chip8.errors import StackOverflow, StackUnderflow
from chip8.state import DecodeState, Display, Input, Memory, Registers, Stack, Timers


class TestMemory:

    def test_font_loaded_at_construction(self):
        mem = Memory()
        assert bytes(mem.data[:len(FONT)]) == FONT
        assert mem.data[0x50:] == bytearray(len(mem.data) - 0x50)

    def test_load_program_at_0x200(self):
        mem = Memory()
        mem.load_program(b'\x60\x05')
        assert mem.read_word(PROGRAM_START) == 0x6005
        assert mem.program[:2] == b'\x60\x05'

    def test_program_filling_capacity(self):
        mem = Memory()
        mem.load_program(bytes([0xAA]) * PROGRAM_CAPACITY)
        assert mem.read_byte(0xFFF) == 0xAA

    def test_program_too_large(self):
        mem = Memory()
        with pytest.raises(ProgramTooLarge):
            mem.load_program(bytes(PROGRAM_CAPACITY + 1))
        assert mem.read_byte(PROGRAM_START) == 0

    def test_out_of_range_access(self):
        mem = Memory()
        with pytest.raises(MemoryAccessError):
            mem.read_byte(0x1000)
        with pytest.raises(MemoryAccessError):
            mem.read_word(0xFFF)
        with pytest.raises(MemoryAccessError):
            mem.write_block(0xFFE, [1, 2, 3])
        with pytest.raises(MemoryAccessError):
            mem.read_byte(-1)

    def test_write_masks_to_byte(self):
        mem = Memory()
        mem.write_byte(0x300, 0x1FF)
        assert mem.read_byte(0x300) == 0xFF


class TestStack:

    def test_push_pop(self):
        regs = Registers()
        stack = Stack()
        stack.push(regs, 0x202)
        stack.push(regs, 0x404)
        assert regs.sp == 2
        assert stack.pop(regs) == 0x404
        assert stack.pop(regs) == 0x202
        assert regs.sp == 0

    def test_underflow(self):
        regs = Registers()
        with pytest.raises(StackUnderflow):
            Stack().pop(regs)
        assert regs.sp == 0

    def test_overflow(self):
        regs = Registers()
        stack = Stack(capacity=3)
        stack.push(regs, 1)
        stack.push(regs, 2)
        with pytest.raises(StackOverflow):
            stack.push(regs, 3)
        assert regs.sp == 2
        assert stack.pop(regs) == 2

    def test_pointer_stays_below_capacity(self):
        regs = Registers()
        stack = Stack(capacity=4)
        for address in range(10):
            try:
                stack.push(regs, address)
            except StackOverflow:
                pass
            assert 0 <= regs.sp < stack.capacity


class TestDisplay:

    def test_toggle_reports_set_to_unset(self):
        display = Display()
        assert display.toggle(3, 4, 1) is False
        assert display.pixel(3, 4) == 1
        assert display.toggle(3, 4, 1) is True
        assert display.pixel(3, 4) == 0

    def test_clear(self):
        display = Display()
        display.toggle(0, 0, 1)
        display.toggle(63, 31, 1)
        display.clear()
        assert not any(display.data)

    def test_changed_flag(self):
        display = Display()
        assert display.changed
        display.changed = False
        display.toggle(5, 5, 0)
        assert not display.changed
        display.toggle(5, 5, 1)
        assert display.changed
        display.changed = False
        display.clear()
        assert display.changed

    def test_rows(self):
        display = Display()
        display.toggle(1, 2, 1)
        rows = list(display.rows())
        assert len(rows) == 32
        assert rows[2][1] == 1
        assert sum(map(sum, rows)) == 1


class TestTimers:

    def test_tick_saturates(self):
        timers = Timers(delay=1, sound=0)
        timers.tick()
        timers.tick()
        assert timers.delay == 0
        assert timers.sound == 0


class TestInput:

    def test_update_keeps_previous(self):
        keys = Input()
        pressed = [0] * 16
        pressed[3] = True
        keys.update(pressed)
        keys.update([0] * 16)
        assert keys.previous_keys[3] == 1
        assert keys.keys[3] == 0

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            Input().update([0] * 15)


def test_decode_fields():
    state = DecodeState.from_opcode(0xD12A, 0x234)
    assert (state.x, state.y, state.n) == (0x1, 0x2, 0xA)
    assert state.nn == 0x2A
    assert state.nnn == 0x12A
    assert state.address == 0x234
