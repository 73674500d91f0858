from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dcpu_core_tracer.transport.address_space import AddressPolicy

@dataclass
class ProgramImage:
    origin: int = 0x0000
    words: List[int] = field(default_factory=list)
    file: Optional[str] = None  # 16進テキストファイル（設定ファイルからの相対パス）

@dataclass
class CpuInitialState:
    pc: int = 0x0000
    sp: int = 0x0000
    registers: Dict[str, int] = field(default_factory=dict)

@dataclass
class SystemConfig:
    architecture: str = "DCPU16"
    address_policy: AddressPolicy = AddressPolicy.SPARSE
    max_steps: Optional[int] = None
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
    program: ProgramImage = field(default_factory=ProgramImage)
    symbols: Dict[str, int] = field(default_factory=dict)
