# src/dcpu_core_tracer/arch/dcpu16/state.py
"""
DCPU-16 CPU固有の状態定義。
"""
from dataclasses import dataclass
from typing import Dict

from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.core.state import CpuState

# @intent:responsibility DCPU-16の全てのレジスタ（A-J, SP, PC, O）の値を保持します。
# @intent:rationale レジスタの実体はAddressSpaceにあり、このクラスはある時点のコピーです。
@dataclass
class Dcpu16CpuState(CpuState):
    """
    DCPU-16 CPUのレジスタ状態を保持するデータクラス。
    """
    a: int = 0x0000
    b: int = 0x0000
    c: int = 0x0000
    x: int = 0x0000
    y: int = 0x0000
    z: int = 0x0000
    i: int = 0x0000
    j: int = 0x0000
    o: int = 0x0000 # Overflow

    # @intent:responsibility レジスタ名をキーとした辞書に変換します。
    def as_register_dict(self) -> Dict[Register, int]:
        return {reg: getattr(self, reg.value.lower()) for reg in Register}

    # @intent:responsibility レジスタ辞書から状態を生成します。
    @classmethod
    def from_register_dict(cls, values: Dict[Register, int]) -> "Dcpu16CpuState":
        return cls(**{reg.value.lower(): value for reg, value in values.items()})
