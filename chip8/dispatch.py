"""Two-level opcode lookup.

An opcode's top nibble selects its family; the family's mask then picks
out the bits that tell its instructions apart.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .errors import DispatchError, UnimplementedOpcode

# An operation mutates the interpreter and returns the new VF value,
# or None when it leaves VF alone.
Operation = Callable[[object], Optional[int]]


@dataclass
class InstructionFamily:
    mask: int
    instructions: Dict[int, Operation] = field(default_factory=dict)


class DispatchTable:

    def __init__(self):
        self._families: Dict[int, InstructionFamily] = {}
        self._frozen = False

    def add(self, family: int, key: int, mask: int, operation: Operation):
        if self._frozen:
            raise DispatchError("dispatch table is frozen")
        if not 0 <= family <= 0xF:
            raise DispatchError("family out of range: %X" % family)
        if key & ~mask & 0xFFFF:
            raise DispatchError("key %04X has bits outside mask %04X" % (key, mask))

        entry = self._families.setdefault(family, InstructionFamily(mask))
        if entry.mask != mask:
            raise DispatchError(
                "family %X registered with mask %04X, got %04X" % (family, entry.mask, mask))
        if key in entry.instructions:
            raise DispatchError("duplicate instruction %X/%04X" % (family, key))
        entry.instructions[key] = operation

    def freeze(self) -> 'DispatchTable':
        self._frozen = True
        return self

    def lookup(self, opcode: int, address: Optional[int] = None) -> Operation:
        entry = self._families.get(opcode >> 12)
        if entry is None:
            raise UnimplementedOpcode(opcode, address)
        operation = entry.instructions.get(opcode & entry.mask)
        if operation is None:
            raise UnimplementedOpcode(opcode, address)
        return operation

    def family(self, family: int) -> InstructionFamily:
        return self._families[family]

    def __contains__(self, opcode: int) -> bool:
        entry = self._families.get(opcode >> 12)
        return entry is not None and (opcode & entry.mask) in entry.instructions
