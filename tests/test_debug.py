import pytest

from chip8.debug import format_registers, memory_dump, mnemonic
from chip8.state import DecodeState, Memory, Registers


@pytest.mark.parametrize('opcode, text', [
    (0x00E0, 'CLS'),
    (0x00EE, 'RET'),
    (0x1ABC, 'JMP 0xABC'),
    (0x2300, 'CALL 0x300'),
    (0x3A42, 'SE VA, 42'),
    (0x5120, 'SE V1, V2'),
    (0x7F01, 'ADD VF, 1'),
    (0x8124, 'ADD V1, V2'),
    (0x812E, 'SHL V1, V2'),
    (0x9340, 'SNE V3, V4'),
    (0xB123, 'JP V0, 123'),
    (0xD125, 'DRW V1, V2, 5'),
    (0xE59E, 'SKP V5'),
    (0xF20A, 'LD V2, K'),
    (0xF955, 'LD [I], V9'),
    (0xF965, 'LD V9, [I]'),
    (0x0123, '??? 0x0123'),
    (0x812F, '??? 0x812F'),
    (0xF1FF, '??? 0xF1FF'),
])
def test_mnemonic(opcode, text):
    assert mnemonic(DecodeState.from_opcode(opcode)) == text


def test_format_registers():
    regs = Registers()
    regs.v[0xA] = 5
    regs.pc = 0x2F0
    text = format_registers(regs)
    assert 'VA: 00000101' in text.splitlines()
    assert 'PC: 0x2F0' in text
    assert len(text.splitlines()) == 19


def test_memory_dump():
    mem = Memory()
    mem.load_program(b'\x12\x00')
    lines = memory_dump(mem, 0x200, 0x230, width=16).splitlines()
    assert len(lines) == 3
    assert lines[0].startswith('0x200\t12 00 00')
    assert lines[2].startswith('0x220\t')


def test_memory_dump_covers_font():
    first = memory_dump(Memory()).splitlines()[0]
    assert first == '0x000\t' + 'F0 90 90 90 F0 20 60 20 20 70 F0 10 F0 80 F0 F0 10 F0 10 F0 90 90 F0 10'
