# src/dcpu_core_tracer/arch/dcpu16/decoder.py
"""
DCPU-16 命令ワードのデコード。

命令ワードを opcode / オペランドAフィールド / オペランドBフィールド に分解し、
オペランドを解決せずに命令のワード長を求める純粋関数を提供します。
"""
from typing import NamedTuple

# @intent:constant 命令ワード内の各フィールドのビットマスクとシフト量。
OPCODE_MASK = 0x000F
A_MASK = 0x03F0
A_SHIFT = 4
B_MASK = 0xFC00
B_SHIFT = 10

# @intent:responsibility 1ワードの命令を構成する3つのフィールドを保持します。
class Instruction(NamedTuple):
    opcode: int  # bits 0-3
    a: int       # bits 4-9
    b: int       # bits 10-15

# @intent:responsibility 生の命令ワードをフィールドに分解します。
def decode_word(word: int) -> Instruction:
    return Instruction(
        word & OPCODE_MASK,
        (word & A_MASK) >> A_SHIFT,
        (word & B_MASK) >> B_SHIFT,
    )

# @intent:responsibility オペランドフィールドが後続ワードを1つ消費するかを判定します。
def has_trailing_word(field: int) -> bool:
    """[register + next word], [next word], next word (literal) の3種が後続ワードを持ちます。"""
    return 0x10 <= field <= 0x17 or field in (0x1E, 0x1F)

# @intent:responsibility 命令ワードが占めるワード数（1-3）を返します。
# @intent:pre-condition オペランドの解決もPCの変更も行いません。不成立の条件分岐のスキップに使用されます。
def word_size(word: int) -> int:
    instruction = decode_word(word)
    return 1 + sum(1 for field in (instruction.a, instruction.b) if has_trailing_word(field))
