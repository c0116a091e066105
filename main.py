import argparse
import logging
import sys
from pathlib import Path

import pyxel

from chip8 import Interpreter, PRESETS, UnimplementedOpcode, Chip8Error, KEY_COUNT
from chip8.debug import format_registers, memory_dump

logger = logging.getLogger('chip8.host')


class App:
    # keys laid out as the keypad:
    #
    # 1 2 3 4          1 2 3 C
    # Q W E R     ->   4 5 6 D
    # A S D F          7 8 9 E
    # Z X C V          A 0 B F
    keys_dict = {
        0x1: pyxel.KEY_1,
        0x2: pyxel.KEY_2,
        0x3: pyxel.KEY_3,
        0xC: pyxel.KEY_4,
        0x4: pyxel.KEY_Q,
        0x5: pyxel.KEY_W,
        0x6: pyxel.KEY_E,
        0xD: pyxel.KEY_R,
        0x7: pyxel.KEY_A,
        0x8: pyxel.KEY_S,
        0x9: pyxel.KEY_D,
        0xE: pyxel.KEY_F,
        0xA: pyxel.KEY_Z,
        0x0: pyxel.KEY_X,
        0xB: pyxel.KEY_C,
        0xF: pyxel.KEY_V,
    }

    def __init__(self, vm, steps_per_frame=10, scale=10):
        self.vm = vm
        self.steps_per_frame = steps_per_frame
        self.scale = scale
        self.halted = False

    def run(self):
        display = self.vm.display
        pyxel.init(display.width, display.height, title='Chip-8',
                   fps=60, display_scale=self.scale)
        pyxel.run(self.update, self.draw)

    def key_states(self):
        keys = [0] * KEY_COUNT
        for key, button in self.keys_dict.items():
            if pyxel.btn(button):
                keys[key] = 1
        return keys

    def update(self):
        if pyxel.btnp(pyxel.KEY_F1):
            root = logging.getLogger('chip8')
            debugging = root.getEffectiveLevel() > logging.DEBUG
            root.setLevel(logging.DEBUG if debugging else logging.INFO)
            logger.info('instruction trace %s', 'on' if debugging else 'off')
        if pyxel.btnp(pyxel.KEY_F2):
            logger.info('registers:\n%s', format_registers(self.vm.registers))
        if pyxel.btnp(pyxel.KEY_F3):
            logger.info('memory:\n%s', memory_dump(self.vm.memory))

        if self.halted:
            return

        keys = self.key_states()
        try:
            for _ in range(self.steps_per_frame):
                self.vm.step(keys)
        except UnimplementedOpcode as e:
            logger.error('Emulation stopped: %s', e)
            self.halted = True
        except Chip8Error as e:
            logger.error('Emulation error: %s', e)
            self.halted = True

    def draw(self):
        display = self.vm.display
        if not display.changed:
            return
        for y, row in enumerate(display.rows()):
            for x, value in enumerate(row):
                pyxel.pset(x, y, 7 if value else 0)
        display.changed = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Run a CHIP-8 program.')
    parser.add_argument('rom', type=Path, help='program file to load at 0x200')
    parser.add_argument('--mode', choices=sorted(PRESETS), default='xochip',
                        help='compatibility preset (default: xochip)')
    parser.add_argument('--steps-per-frame', type=int, default=10,
                        help='instructions executed per 60Hz frame')
    parser.add_argument('--scale', type=int, default=10, help='window scale')
    parser.add_argument('--debug', action='store_true',
                        help='log every executed instruction')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    try:
        rom = args.rom.read_bytes()
    except OSError as e:
        logger.error('cannot read %s: %s', args.rom, e)
        return 1

    vm = Interpreter(PRESETS[args.mode])
    try:
        vm.load_program(rom)
    except Chip8Error as e:
        logger.error('%s', e)
        return 1
    logger.info('loaded %s (%d bytes), mode %s', args.rom.name, len(rom), args.mode)

    App(vm, args.steps_per_frame, args.scale).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
