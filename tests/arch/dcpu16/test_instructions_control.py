import unittest

from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.cpu import Dcpu16Cpu

A, B, SP, PC = Register.A, Register.B, Register.SP, Register.PC

class TestDcpu16ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.space = AddressSpace()
        self.cpu = Dcpu16Cpu(self.space)
        self.cpu.reset()

    def _load(self, address, *words):
        for i, w in enumerate(words):
            self.space.load(address + i, w)

    def _execute(self, *words, at=0x0000):
        self._load(at, *words)
        self.cpu.write(PC, at)
        return self.cpu.step()

    # --- 条件分岐 ---

    def test_ife_taken(self):
        self.cpu.write(A, 3)
        self.cpu.write(B, 3)
        # IFE A, B
        self._execute(0x040C)
        self.assertEqual(self.cpu.read(PC), 1)

    def test_ife_not_taken_skips_one_word_instruction(self):
        self.cpu.write(A, 1)
        self.cpu.write(B, 2)
        self._load(1, 0x9401) # SET A, 0x05
        self._execute(0x040C)
        self.assertEqual(self.cpu.read(PC), 2)
        self.assertEqual(self.cpu.read(A), 1)

    def test_skip_three_word_instruction_without_side_effects(self):
        self.cpu.write(A, 1)
        self.cpu.write(B, 2)
        # SET [0x1000+A], 0x1234
        self._load(1, 0x7D01, 0x1000, 0x1234)
        self._execute(0x040C)
        self.assertEqual(self.cpu.read(PC), 4)
        self.assertEqual(self.cpu.read(0x1001), 0)

    def test_skip_does_not_pop(self):
        self.cpu.write(A, 1)
        self.cpu.write(B, 2)
        self.cpu.write(SP, 0xFFF0)
        self.space.load(0xFFF0, 0x0099)
        # SET A, POP
        self._load(1, 0x6001)
        self._execute(0x040C)
        self.assertEqual(self.cpu.read(PC), 2)
        self.assertEqual(self.cpu.read(SP), 0xFFF0)
        self.assertEqual(self.cpu.read(A), 1)

    def test_conditional_with_own_trailing_word(self):
        # IFE A, 0x1234 ; SET A, 0x0030
        self._load(2, 0x7C01, 0x0030)
        self._execute(0x7C0C, 0x1234)
        self.assertEqual(self.cpu.read(PC), 4)

        self.cpu.write(A, 0x1234)
        self._execute(0x7C0C, 0x1234)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_ifn(self):
        self.cpu.write(A, 1)
        self.cpu.write(B, 2)
        # IFN A, B
        self._execute(0x040D)
        self.assertEqual(self.cpu.read(PC), 1)
        self.cpu.write(B, 1)
        self._execute(0x040D)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_ifg(self):
        self.cpu.write(A, 5)
        self.cpu.write(B, 3)
        # IFG A, B
        self._execute(0x040E)
        self.assertEqual(self.cpu.read(PC), 1)
        self.cpu.write(A, 3)
        self._execute(0x040E)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_ifb(self):
        self.cpu.write(A, 0b0110)
        self.cpu.write(B, 0b0100)
        # IFB A, B
        self._execute(0x040F)
        self.assertEqual(self.cpu.read(PC), 1)
        self.cpu.write(A, 0b0001)
        self._execute(0x040F)
        self.assertEqual(self.cpu.read(PC), 2)

    # --- 拡張命令 ---

    def test_jsr_literal(self):
        # JSR 0x10 at 0x0008
        self._execute(0xC010, at=0x0008)
        self.assertEqual(self.cpu.read(SP), 0xFFFF)
        self.assertEqual(self.cpu.read(0xFFFF), 0x0009)
        self.assertEqual(self.cpu.read(PC), 0x0010)

    def test_jsr_next_word(self):
        # JSR 0x0200
        self._execute(0x7C10, 0x0200)
        self.assertEqual(self.cpu.read(0xFFFF), 0x0002)
        self.assertEqual(self.cpu.read(PC), 0x0200)

    def test_unknown_extended_selector_is_noop(self):
        self.cpu.write(A, 7)
        self._execute(0x8020)
        self.assertEqual(self.cpu.read(PC), 1)
        self.assertEqual(self.cpu.read(A), 7)
        self.assertEqual(self.cpu.read(SP), 0)

    def test_unknown_extended_selector_skips_trailing_word(self):
        self._execute(0x7C20, 0x1234)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_zero_word_advances(self):
        self._execute(0x0000)
        self.assertEqual(self.cpu.read(PC), 1)

if __name__ == '__main__':
    unittest.main()
