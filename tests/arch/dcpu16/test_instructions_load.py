import unittest

from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.cpu import Dcpu16Cpu

A, B, SP, PC = Register.A, Register.B, Register.SP, Register.PC

class TestDcpu16LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.space = AddressSpace()
        self.cpu = Dcpu16Cpu(self.space)
        self.cpu.reset()

    def _execute(self, *words):
        for i, w in enumerate(words):
            self.space.load(i, w)
        self.cpu.write(PC, 0x0000)
        return self.cpu.step()

    def test_set_register_literal(self):
        # SET A, 0x05
        self._execute(0x9401)
        self.assertEqual(self.cpu.read(A), 5)
        self.assertEqual(self.cpu.read(PC), 1)

    def test_set_next_word_literal(self):
        # SET A, 0x0030
        self._execute(0x7C01, 0x0030)
        self.assertEqual(self.cpu.read(A), 0x0030)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_set_register_indirect(self):
        self.cpu.write(A, 0x0100)
        self.cpu.write(B, 0x00AB)
        # SET [A], B
        self._execute(0x0481)
        self.assertEqual(self.cpu.read(0x0100), 0x00AB)

    def test_set_register_offset(self):
        self.cpu.write(A, 2)
        # SET [0x0100+A], 0x07
        self._execute(0x9D01, 0x0100)
        self.assertEqual(self.cpu.read(0x0102), 7)
        self.assertEqual(self.cpu.read(PC), 2)

    def test_operand_a_consumes_before_b(self):
        # SET [0x2000], 0x1234
        self._execute(0x7DE1, 0x2000, 0x1234)
        self.assertEqual(self.cpu.read(0x2000), 0x1234)
        self.assertEqual(self.cpu.read(PC), 3)

    def test_set_next_word_indirect_source(self):
        self.space.load(0x1000, 0x0BAD)
        # SET A, [0x1000]
        self._execute(0x7801, 0x1000)
        self.assertEqual(self.cpu.read(A), 0x0BAD)

    def test_set_literal_destination_is_discarded(self):
        self.cpu.write(A, 3)
        # SET 0x05, A
        self._execute(0x0251)
        self.assertEqual(self.cpu.read(A), 3)
        self.assertEqual(self.cpu.read(PC), 1)
        self.assertEqual(self.space.memory_items(), [(0, 0x0251)])

    def test_set_pc_does_not_advance(self):
        # SET PC, 0x10
        self._execute(0xC1C1)
        self.assertEqual(self.cpu.read(PC), 0x0010)

    def test_set_push_and_pop(self):
        self.cpu.write(A, 0x0042)
        # SET PUSH, A
        self._execute(0x01A1)
        self.assertEqual(self.cpu.read(SP), 0xFFFF)
        self.assertEqual(self.cpu.read(0xFFFF), 0x0042)
        # SET B, POP
        self._execute(0x6011)
        self.assertEqual(self.cpu.read(B), 0x0042)
        self.assertEqual(self.cpu.read(SP), 0x0000)

    def test_set_peek_twice(self):
        self.cpu.write(SP, 0xFFFE)
        self.space.load(0xFFFE, 42)
        # SET A, PEEK
        self._execute(0x6401)
        self._execute(0x6401)
        self.assertEqual(self.cpu.read(A), 42)
        self.assertEqual(self.cpu.read(SP), 0xFFFE)

    def test_push_as_source(self):
        self.cpu.write(SP, 0x8000)
        self.space.load(0x8000, 0x0055)
        # SET A, PUSH
        self._execute(0x6801)
        self.assertEqual(self.cpu.read(A), 0x0055)
        self.assertEqual(self.cpu.read(SP), 0x7FFF)

if __name__ == '__main__':
    unittest.main()
