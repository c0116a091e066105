"""Passive machine regions: memory, stack, registers, display, timers, input."""

from dataclasses import dataclass, field
from typing import List, Sequence

from .constants import (
    MEMORY_SIZE, STACK_SIZE, PROGRAM_START, PROGRAM_CAPACITY,
    DISPLAY_WIDTH, DISPLAY_HEIGHT, DISPLAY_SIZE, KEY_COUNT, REGISTER_COUNT,
    FONT, FONT_START,
)
from .errors import MemoryAccessError, ProgramTooLarge, StackOverflow, StackUnderflow


class Memory:
    """Flat 4K byte store holding the font, the program and free RAM."""

    def __init__(self):
        self.data = bytearray(MEMORY_SIZE)
        self.data[FONT_START:FONT_START + len(FONT)] = FONT

    def _check(self, address, length=1):
        if address < 0:
            raise MemoryAccessError(address)
        if address + length > MEMORY_SIZE:
            raise MemoryAccessError(max(address, MEMORY_SIZE))

    def read_byte(self, address: int) -> int:
        self._check(address)
        return self.data[address]

    def write_byte(self, address: int, value: int):
        self._check(address)
        self.data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        self._check(address, 2)
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self.data[address:address + length])

    def write_block(self, address: int, values: Sequence[int]):
        self._check(address, len(values))
        self.data[address:address + len(values)] = bytes(v & 0xFF for v in values)

    def load_program(self, program: bytes):
        if len(program) > PROGRAM_CAPACITY:
            raise ProgramTooLarge(len(program), PROGRAM_CAPACITY)
        self.data[PROGRAM_START:PROGRAM_START + len(program)] = program

    @property
    def program(self) -> memoryview:
        return memoryview(self.data)[PROGRAM_START:]


@dataclass
class Registers:
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    index: int = 0
    pc: int = PROGRAM_START
    sp: int = 0


class Stack:
    """Return-address stack kept outside of addressable memory.

    The stack pointer lives in the register file; push stores then
    increments, pop decrements then loads. The pointer stays within
    [0, capacity), so at most capacity - 1 addresses are held.
    """

    def __init__(self, capacity: int = STACK_SIZE):
        self.capacity = capacity
        self.data = [0] * capacity

    def push(self, registers: Registers, address: int):
        if registers.sp + 1 >= self.capacity:
            raise StackOverflow("call depth exceeds %d" % (self.capacity - 1))
        self.data[registers.sp] = address
        registers.sp += 1

    def pop(self, registers: Registers) -> int:
        if registers.sp <= 0:
            raise StackUnderflow("return with an empty stack")
        registers.sp -= 1
        return self.data[registers.sp]


class Display:
    """64x32 monochrome framebuffer, row-major, one byte (0 or 1) per cell.

    ``changed`` is raised by every clear or pixel flip and lowered by the
    host once it has redrawn the screen.
    """

    width = DISPLAY_WIDTH
    height = DISPLAY_HEIGHT

    def __init__(self):
        self.data = bytearray(DISPLAY_SIZE)
        self.changed = True

    def clear(self):
        self.data[:] = bytes(DISPLAY_SIZE)
        self.changed = True

    def pixel(self, x: int, y: int) -> int:
        return self.data[y * self.width + x]

    def toggle(self, x: int, y: int, bit: int) -> bool:
        """XOR ``bit`` into a cell; returns True if the cell went from 1 to 0."""
        offset = y * self.width + x
        previous = self.data[offset]
        self.data[offset] = previous ^ bit
        if bit:
            self.changed = True
        return bool(previous and not self.data[offset])

    def rows(self):
        for y in range(self.height):
            start = y * self.width
            yield bytes(self.data[start:start + self.width])


@dataclass
class Timers:
    delay: int = 0
    sound: int = 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1


@dataclass
class Input:
    keys: List[int] = field(default_factory=lambda: [0] * KEY_COUNT)
    previous_keys: List[int] = field(default_factory=lambda: [0] * KEY_COUNT)

    def update(self, keys: Sequence):
        if len(keys) != KEY_COUNT:
            raise ValueError("expected %d key states, got %d" % (KEY_COUNT, len(keys)))
        self.previous_keys = self.keys
        self.keys = [1 if k else 0 for k in keys]


@dataclass(frozen=True)
class DecodeState:
    opcode: int = 0
    x: int = 0
    y: int = 0
    n: int = 0
    nn: int = 0
    nnn: int = 0
    address: int = 0

    @classmethod
    def from_opcode(cls, opcode: int, address: int = 0) -> 'DecodeState':
        return cls(
            opcode=opcode,
            x=(opcode & 0x0F00) >> 8,
            y=(opcode & 0x00F0) >> 4,
            n=opcode & 0x000F,
            nn=opcode & 0x00FF,
            nnn=opcode & 0x0FFF,
            address=address,
        )
