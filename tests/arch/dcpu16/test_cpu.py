# tests/arch/dcpu16/test_cpu.py
"""
Dcpu16Cpuの実行ループとスナップショットのテスト。
"""
import pytest

from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.core.faults import DivisionByZeroFault, RunOutcome
from dcpu_core_tracer.transport.address_space import AccessType, AddressSpace
from dcpu_core_tracer.arch.dcpu16 import Dcpu16Cpu, Dcpu16CpuState
from dcpu_core_tracer.loader.loader import ProgramLoader

# @intent:test_suite DCPU-16のフェッチ・実行ループと外部インスペクションAPIを検証します。

@pytest.fixture
def cpu():
    return Dcpu16Cpu(AddressSpace())

def load(cpu, words, origin=0):
    ProgramLoader().load_words(cpu.address_space, words, origin)

class TestScenarios:
    def test_set_a_5(self, cpu):
        load(cpu, [0x9401])
        snapshot = cpu.step()
        assert cpu.read(Register.A) == 5
        assert cpu.read(Register.PC) == 1
        assert snapshot.state.a == 5
        assert snapshot.operation.mnemonic == "SET"
        assert snapshot.operation.operands == ["A", "0x05"]

    def test_add_overflow(self, cpu):
        load(cpu, [0x8402])
        cpu.write(Register.A, 0xFFFF)
        cpu.step()
        assert cpu.read(Register.A) == 0x0000
        assert cpu.read(Register.O) == 0

    def test_division_by_zero_run(self, cpu):
        # SET A, 10 ; SET B, 0 ; DIV A, B
        load(cpu, [0xA801, 0x8011, 0x0405])
        result = cpu.run()
        assert result.outcome is RunOutcome.FAULT
        assert isinstance(result.fault, DivisionByZeroFault)
        assert result.steps == 2
        assert result.pc == 2
        assert cpu.read(Register.A) == 10

    def test_call(self, cpu):
        # JSR 0x10 at 0x0004
        load(cpu, [0xC010], origin=0x0004)
        cpu.write(Register.PC, 0x0004)
        sp_before = cpu.read(Register.SP)
        cpu.step()
        assert cpu.read(Register.SP) == (sp_before - 1) & 0xFFFF
        assert cpu.read(cpu.read(Register.SP)) == 0x0005
        assert cpu.read(Register.PC) == 0x0010

class TestRun:
    def test_run_resets_sp_and_sets_pc(self, cpu):
        # SET PC, 0x10 at 0x0010 (無限ループ)
        load(cpu, [0xC1C1], origin=0x0010)
        cpu.write(Register.SP, 0x1234)
        result = cpu.run(start_address=0x0010, max_steps=1)
        assert result.outcome is RunOutcome.STEP_LIMIT
        assert cpu.read(Register.SP) == 0
        assert cpu.read(Register.PC) == 0x0010

    def test_step_limit(self, cpu):
        load(cpu, [0x81C1]) # SET PC, 0x00
        result = cpu.run(max_steps=100)
        assert result.outcome is RunOutcome.STEP_LIMIT
        assert result.steps == 100
        assert result.pc == 0

    def test_subroutine_program(self, cpu):
        load(cpu, [
            0x9010,         # 0: JSR 0x04
            0x85C1,         # 1: SET PC, 0x01
            0x0000, 0x0000,
            0x7C01, 0x0030, # 4: SET A, 0x0030
            0x61C1,         # 6: SET PC, POP
        ])
        result = cpu.run(start_address=0, max_steps=4)
        assert result.steps == 4
        assert cpu.read(Register.A) == 0x0030
        assert cpu.read(Register.PC) == 0x0001
        assert cpu.read(Register.SP) == 0x0000

    def test_cancel(self, cpu):
        load(cpu, [0x81C1])
        result = cpu.run(should_stop=lambda: cpu.step_count >= 7)
        assert result.outcome is RunOutcome.CANCELLED
        assert result.steps == 7

class TestInspection:
    def test_reset_keeps_memory(self, cpu):
        load(cpu, [0x9401])
        cpu.write(Register.A, 9)
        cpu.reset(0x0020)
        assert cpu.read(Register.A) == 0
        assert cpu.read(Register.PC) == 0x0020
        assert cpu.read(0) == 0x9401

    def test_register_map(self, cpu):
        cpu.write(Register.X, 0x00AA)
        regs = cpu.get_register_map()
        assert regs["X"] == 0x00AA
        assert set(regs) == {"A", "B", "C", "X", "Y", "Z", "I", "J", "SP", "PC", "O"}

    def test_register_layout(self, cpu):
        layout = cpu.get_register_layout()
        names = [r.name for group in layout for r in group.registers]
        assert len(names) == 11
        assert all(r.width == 16 for group in layout for r in group.registers)

    def test_restore_state(self, cpu):
        state = Dcpu16CpuState(pc=0x0100, sp=0xFFF0, a=1, o=2)
        cpu.restore_state(state)
        assert cpu.get_state() == state

    def test_snapshot_memory_activity(self, cpu):
        load(cpu, [0x7DE1, 0x2000, 0x1234]) # SET [0x2000], 0x1234
        snapshot = cpu.step()
        writes = [a for a in snapshot.memory_activity if a.access_type is AccessType.WRITE]
        assert [(w.address, w.data, w.previous_data) for w in writes] == [(0x2000, 0x1234, 0)]
        assert snapshot.memory_activity[0].address == 0 # 命令フェッチ
        assert snapshot.operation.length == 3

    def test_symbol_info(self, cpu):
        load(cpu, [0x9401])
        cpu.set_symbol_map({"start": 0})
        snapshot = cpu.step()
        assert snapshot.metadata.symbol_info == "start: SET A, 0x05"
