"""Debugging aids: disassembly, register and memory dumps."""

from typing import Optional

from .state import DecodeState, Memory, Registers

_FIXED = {
    0x00E0: 'CLS',
    0x00EE: 'RET',
}

_FAMILY = {
    0x1: lambda s: 'JMP 0x%X' % s.nnn,
    0x2: lambda s: 'CALL 0x%X' % s.nnn,
    0x3: lambda s: 'SE V%X, %X' % (s.x, s.nn),
    0x4: lambda s: 'SNE V%X, %X' % (s.x, s.nn),
    0x5: lambda s: 'SE V%X, V%X' % (s.x, s.y),
    0x6: lambda s: 'LD V%X, %X' % (s.x, s.nn),
    0x7: lambda s: 'ADD V%X, %X' % (s.x, s.nn),
    0xA: lambda s: 'LD I, %X' % s.nnn,
    0xB: lambda s: 'JP V0, %X' % s.nnn,
    0xC: lambda s: 'RND V%X, %X' % (s.x, s.nn),
    0xD: lambda s: 'DRW V%X, V%X, %X' % (s.x, s.y, s.n),
}

_ARITHMETIC = {
    0x0: 'LD', 0x1: 'OR', 0x2: 'AND', 0x3: 'XOR', 0x4: 'ADD',
    0x5: 'SUB', 0x6: 'SHR', 0x7: 'SUBN', 0xE: 'SHL',
}

_MISC = {
    0xE09E: 'SKP V%X',
    0xE0A1: 'SKNP V%X',
    0xF007: 'LD V%X, DT',
    0xF00A: 'LD V%X, K',
    0xF015: 'LD DT, V%X',
    0xF018: 'LD ST, V%X',
    0xF01E: 'ADD I, V%X',
    0xF029: 'LD F, V%X',
    0xF033: 'LD B, V%X',
    0xF055: 'LD [I], V%X',
    0xF065: 'LD V%X, [I]',
}


def mnemonic(state: DecodeState) -> str:
    """Return assembly-style text for a decoded instruction."""
    opcode = state.opcode
    family = opcode >> 12

    if opcode in _FIXED:
        return _FIXED[opcode]
    if family in _FAMILY:
        return _FAMILY[family](state)
    if family == 0x8 and state.n in _ARITHMETIC:
        return '%s V%X, V%X' % (_ARITHMETIC[state.n], state.x, state.y)
    if family == 0x9 and state.n == 0:
        return 'SNE V%X, V%X' % (state.x, state.y)
    if (opcode & 0xF0FF) in _MISC:
        return _MISC[opcode & 0xF0FF] % state.x
    return '??? 0x%04X' % opcode


def format_registers(registers: Registers) -> str:
    lines = []
    for x, value in enumerate(registers.v):
        lines.append('V%X: %s' % (x, bin(value)[2:].zfill(8)))
    lines.append('I: 0x%03X' % registers.index)
    lines.append('PC: 0x%03X' % registers.pc)
    lines.append('SP: %d' % registers.sp)
    return '\n'.join(lines)


def memory_dump(memory: Memory, start: int = 0, end: Optional[int] = None,
                width: int = 24) -> str:
    if end is None:
        end = len(memory.data)
    rows = []
    for address in range(start, end, width):
        chunk = memory.data[address:min(address + width, end)]
        rows.append('0x%03x\t' % address + ' '.join('%02X' % b for b in chunk))
    return '\n'.join(rows)
