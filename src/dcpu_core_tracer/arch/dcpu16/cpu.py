# src/dcpu_core_tracer/arch/dcpu16/cpu.py
"""
DCPU-16 CPUエミュレーションの中心モジュール。

フェッチ・実行ループを駆動し、run開始時のレジスタ初期化（SP/PCのリセット）を担います。
"""
from typing import Dict, List, Optional, Tuple

from dcpu_core_tracer.common.types import Location, Register, RegisterInfo, RegisterLayoutInfo, Word
from dcpu_core_tracer.core.cpu import AbstractCpu
from dcpu_core_tracer.core.snapshot import Operation
from dcpu_core_tracer.core.state import CpuState
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.state import Dcpu16CpuState
from dcpu_core_tracer.arch.dcpu16.instructions import execute_instruction
from dcpu_core_tracer.arch.dcpu16 import disassembler

# @intent:responsibility DCPU-16 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Dcpu16Cpu(AbstractCpu):
    """
    DCPU-16 CPUをエミュレートするクラス。
    AddressSpaceを省略した場合は、このCPU専用のゼロ初期化されたアドレス空間を生成します。
    """
    def __init__(self, space: Optional[AddressSpace] = None):
        super().__init__(space if space is not None else AddressSpace())

    # @intent:responsibility レジスタを初期化します（SP=0, PC=start_address）。
    # @intent:rationale ロード済みのプログラムを保持するため、メモリセルはクリアしません。
    def reset(self, start_address: int = 0) -> None:
        for reg in Register:
            self._space.write(reg, 0)
        self._space.write(Register.PC, start_address)
        self._step_count = 0

    # @intent:responsibility runの開始時にSPを0に、指定があればPCを開始アドレスに設定します。
    def _on_run_start(self, start_address: Optional[int]) -> None:
        self._space.write(Register.SP, 0)
        if start_address is not None:
            self._space.write(Register.PC, start_address)

    def _capture_state(self) -> Dcpu16CpuState:
        return Dcpu16CpuState.from_register_dict(
            {reg: self._space.inspect(reg) for reg in Register}
        )

    # @intent:responsibility 状態オブジェクトのレジスタ値をアドレス空間へ書き戻します。
    def restore_state(self, state: CpuState) -> None:
        if isinstance(state, Dcpu16CpuState):
            for reg, value in state.as_register_dict().items():
                self._space.write(reg, value)
        else:
            self._space.write(Register.PC, state.pc)
            self._space.write(Register.SP, state.sp)

    # @intent:responsibility PCの指すアドレスから命令ワードをフェッチします（PCの間接参照）。
    def _fetch(self) -> int:
        return self._space.dereference(Register.PC)

    def _decode(self, word: int, pc: int) -> Operation:
        return disassembler.decode_operation(self._space, pc)

    def _execute(self, word: int) -> None:
        execute_instruction(word, self._space)

    # --- 外部インスペクション/テストハーネス向け ---

    def read(self, location: Location) -> Word:
        return self._space.inspect(location)

    def write(self, location: Location, value: int) -> None:
        self._space.write(location, value)

    # @intent:responsibility 現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        return {reg.value: self._space.inspect(reg) for reg in Register}

    # @intent:responsibility レジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [
                RegisterInfo(name, 16) for name in ("A", "B", "C", "X", "Y", "Z", "I", "J")
            ]),
            RegisterLayoutInfo("Special", [
                RegisterInfo("SP", 16), RegisterInfo("PC", 16), RegisterInfo("O", 16)
            ]),
        ]

    def disassemble(self, start_addr: int, count: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._space, start_addr, count)
