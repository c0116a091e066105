import random

import pytest

from chip8 import Interpreter, Quirks


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_vm(clock):
    """Build an interpreter with a program loaded at 0x200."""
    def factory(program=b'', quirks=Quirks.NONE, seed=0):
        vm = Interpreter(quirks, clock=clock, rng=random.Random(seed))
        vm.load_program(bytes(program))
        return vm
    return factory


