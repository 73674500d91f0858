# dcpu_core_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行後のCPUとアドレス空間アクセスを記録した不変のデータ構造を定義します。
デバッグ時の状態記録とテストハーネスでの検証に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from dcpu_core_tracer.core.state import CpuState
from dcpu_core_tracer.transport.address_space import MemoryAccess

# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "7C01"
    mnemonic: str # 例: "SET"
    operands: List[str] = field(default_factory=list) # 例: ["A", "0x0030"]
    operand_words: List[int] = field(default_factory=list) # 後続ワード（生の値）
    length: int = 1 # 命令のワード長 (1-3)

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計命令数、シンボル情報など）を記録するデータクラス。
    """
    step_count: int
    symbol_info: Optional[str] = None # 例: "loop: SET A, 0x30"

# @intent:responsibility ある一時点におけるCPUの状態とアクセス履歴を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUの状態とそのサイクルのメモリアクセスを記録した不変のデータ構造。
    stateはステップごとに新しく生成されるため、後続の実行で変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
