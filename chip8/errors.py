"""Error taxonomy raised by the interpreter."""


class Chip8Error(Exception):
    """Base class for every interpreter failure."""


class UnimplementedOpcode(Chip8Error, NotImplementedError):
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        if address is None:
            message = "%04X not implemented" % opcode
        else:
            message = "%04X not implemented (at 0x%03X)" % (opcode, address)
        super().__init__(message)


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class MemoryAccessError(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__("memory access out of range: 0x%X" % address)


class ProgramTooLarge(Chip8Error):
    def __init__(self, size, capacity):
        self.size = size
        self.capacity = capacity
        super().__init__(
            "program is %d bytes, only %d fit in memory" % (size, capacity))


class DispatchError(Chip8Error):
    """Inconsistent wiring while building the dispatch table."""
