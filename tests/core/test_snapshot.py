# tests/core/test_snapshot.py
"""
dcpu_core_tracer.core.snapshotモジュールの単体テスト。
"""
import dataclasses

import pytest

from dcpu_core_tracer.core.snapshot import Metadata, Operation, Snapshot
from dcpu_core_tracer.core.state import CpuState

class TestSnapshot:
    def test_operation_defaults(self):
        op = Operation(opcode_hex="9401", mnemonic="SET")
        assert op.operands == []
        assert op.operand_words == []
        assert op.length == 1

    def test_snapshot_is_frozen(self):
        snapshot = Snapshot(
            state=CpuState(pc=1),
            operation=Operation(opcode_hex="9401", mnemonic="SET", operands=["A", "0x05"]),
            metadata=Metadata(step_count=1, symbol_info="SET A, 0x05"),
        )
        assert snapshot.memory_activity == []
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.state = CpuState()
