"""The CHIP-8 interpreter: fetch, decode, execute and timer decay.

Usage:
    vm = Interpreter(Quirks.XOCHIP)
    vm.load_program(Path('roms/test.ch8').read_bytes())
    while running:
        vm.step(keys)           # 16 pressed/released states
        render(vm.display)

One call to ``step`` runs one instruction. ``FX0A`` (wait for key) is the
only instruction that spans several steps: while it waits, fetch and
decode are skipped and its body runs again on every step.
"""

import logging
import random
import time
from typing import Callable, Optional, Sequence

from .constants import FLAG_REGISTER, TIMER_PERIOD
from .debug import mnemonic
from .dispatch import Operation
from .instructions import build_dispatch_table
from .quirks import Quirks
from .state import DecodeState, Display, Input, Memory, Registers, Stack, Timers

logger = logging.getLogger(__name__)


class Interpreter:

    def __init__(self, quirks: Quirks = Quirks.NONE,
                 clock: Callable[[], float] = time.perf_counter,
                 rng: Optional[random.Random] = None):
        self.quirks = Quirks(quirks)
        self.clock = clock
        self.rng = rng if rng is not None else random.Random()

        self.memory = Memory()
        self.stack = Stack()
        self.registers = Registers()
        self.display = Display()
        self.timers = Timers()
        self.input = Input()

        self.state = DecodeState()
        self.previous_state = DecodeState()
        self.waiting_for_key = False

        self._dispatch = build_dispatch_table()
        self._operation: Optional[Operation] = None
        self._last_tick = clock()

    def load_program(self, program: bytes):
        self.memory.load_program(program)

    # ---- Cycle ----
    def step(self, keys: Sequence):
        """Run one fetch-decode-execute cycle with the current key states."""
        self.input.update(keys)

        if not self.waiting_for_key:
            self.fetch()
            self.decode()
        self.execute()

        now = self.clock()
        if now - self._last_tick >= TIMER_PERIOD:
            self.timers.tick()
            self._last_tick = now

    def run(self, steps: int, keys: Sequence):
        for _ in range(steps):
            self.step(keys)

    def fetch(self):
        registers = self.registers
        opcode = self.memory.read_word(registers.pc)

        self.previous_state = self.state
        self.state = DecodeState.from_opcode(opcode, registers.pc)

        # very few instructions move the pc themselves
        registers.pc += 2

    def decode(self):
        self._operation = self._dispatch.lookup(self.state.opcode, self.state.address)

    def execute(self):
        if self._operation is None:
            raise RuntimeError("execute() called before an instruction was decoded")

        was_waiting = self.waiting_for_key
        tracing = logger.isEnabledFor(logging.DEBUG) and not was_waiting
        if tracing:
            logger.debug('pre  0x%03X: %04X  %-16s pc=0x%03X sp=%d',
                         self.state.address, self.state.opcode,
                         mnemonic(self.state), self.registers.pc, self.registers.sp)

        flag = self._operation(self)
        if flag is not None:
            self.registers.v[FLAG_REGISTER] = flag

        if tracing:
            logger.debug('post 0x%03X: %04X  pc=0x%03X sp=%d',
                         self.state.address, self.state.opcode,
                         self.registers.pc, self.registers.sp)

        if self.waiting_for_key != was_waiting:
            logger.debug('%s key wait (V%X = %X)',
                         'entering' if self.waiting_for_key else 'leaving',
                         self.state.x, self.registers.v[self.state.x])
