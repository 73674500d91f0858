# src/dcpu_core_tracer/arch/dcpu16/instructions/control.py
"""
制御命令（条件分岐、サブルーチン呼び出し）の実装。
"""
from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import Instruction, word_size
from dcpu_core_tracer.arch.dcpu16.operands import resolve_operand
from .base import advance_pc, resolve_operands

# @intent:responsibility 条件分岐の共通処理。
# @intent:rationale 条件不成立時は次の命令をオペランド解決せずに読み飛ばすため、
#                  スキップされた命令の副作用（POP、PUSH、後続ワード消費）は一切発生しません。
def perform_branch(space: AddressSpace, condition: bool) -> None:
    """
    条件が成立すれば次の命令へ、不成立なら次の命令全体（後続ワード含む）を飛ばします。
    """
    if condition:
        advance_pc(space)
        return
    pc = space.read(Register.PC)
    skipped = word_size(space.read(pc + 1))
    space.write(Register.PC, pc + 1 + skipped)

# --- IFE / IFN / IFG / IFB ---
def execute_ife(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, _, b = resolve_operands(instruction, space)
    perform_branch(space, a == b)

def execute_ifn(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, _, b = resolve_operands(instruction, space)
    perform_branch(space, a != b)

def execute_ifg(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, _, b = resolve_operands(instruction, space)
    perform_branch(space, a > b)

def execute_ifb(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, _, b = resolve_operands(instruction, space)
    perform_branch(space, (a & b) != 0)

# --- JSR (拡張命令 セレクタ 0x01) ---
# @intent:responsibility 戻りアドレスをスタックにプッシュしてからBの値へジャンプします。
# @intent:note 拡張命令ではAフィールドはセレクタであり、オペランドとしては解決しません。
def execute_jsr(space: AddressSpace, instruction: Instruction, word: int) -> None:
    target, _ = resolve_operand(instruction.b, space)
    # PCはBの後続ワードを消費した位置にあるため、+1で次の命令の先頭になる
    space.push_value(space.read(Register.PC) + 1)
    space.write(Register.PC, target)

# --- 未定義の拡張命令 ---
# @intent:responsibility 未定義セレクタはNOPとして扱い、命令のワード長だけPCを進めます。
# @intent:rationale PCを進めないと同じ命令を永遠に再フェッチするため、前進を保証します。
def execute_reserved(space: AddressSpace, instruction: Instruction, word: int) -> None:
    advance_pc(space, word_size(word))
