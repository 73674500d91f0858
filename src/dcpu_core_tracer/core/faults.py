# dcpu_core_tracer/core/faults.py
"""
CPUフォールトと実行結果の定義。

実行ループを停止させる致命的な状態（フォールト）と、
runの終了理由を呼び出し元へ報告するための結果型を提供します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# @intent:responsibility 実行を継続できない致命的な状態の基底クラス。
class CpuFault(Exception):
    """
    命令の実行中に発生した致命的なフォールト。
    """
    def __init__(self, message: str, pc: int, word: int):
        super().__init__(message)
        self.pc = pc
        self.word = word

# @intent:responsibility DIV命令のゼロ除算を表します。
class DivisionByZeroFault(CpuFault):
    def __init__(self, pc: int, word: int):
        super().__init__(f"Division by zero at PC {pc:#06x} (word {word:#06x})", pc, word)

# @intent:responsibility runが終了した理由を定義します。
class RunOutcome(Enum):
    FAULT = "FAULT"           # フォールトにより停止
    CANCELLED = "CANCELLED"   # stop() または外部のキャンセル判定により停止
    STEP_LIMIT = "STEP_LIMIT" # 命令数の上限に到達

# @intent:responsibility runの結果を呼び出し元へ返します。
@dataclass(frozen=True)
class RunResult:
    outcome: RunOutcome
    steps: int # このrunで実行を完了した命令数
    pc: int    # 停止時のPC（フォールト時はフォールトした命令のアドレス）
    fault: Optional[CpuFault] = None

    @property
    def faulted(self) -> bool:
        return self.outcome is RunOutcome.FAULT
