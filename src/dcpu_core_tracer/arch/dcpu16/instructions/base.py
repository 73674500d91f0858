# src/dcpu_core_tracer/arch/dcpu16/instructions/base.py
"""
DCPU-16命令実装用の共通ユーティリティ。
"""
from typing import Optional, Tuple

from dcpu_core_tracer.common.types import Location, Register, Word
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import Instruction
from dcpu_core_tracer.arch.dcpu16.operands import resolve_operand

# @intent:utility_function 基本命令のオペランドを A, B の順に解決します。
# @intent:pre-condition Aの後続ワード消費（とPCの前進）は必ずBより先に発生します。
def resolve_operands(instruction: Instruction, space: AddressSpace) -> Tuple[Word, Optional[Location], Word]:
    """(a, out, b) を返します。Bの書き込み先は使用されないため破棄します。"""
    a, out = resolve_operand(instruction.a, space)
    b, _ = resolve_operand(instruction.b, space)
    return a, out, b

# @intent:utility_function 書き込み先へ値を格納します。書き込み不可（リテラル）の場合は黙って破棄します。
def store(space: AddressSpace, location: Optional[Location], value: int) -> None:
    if location is None:
        return
    space.write(location, value)

# @intent:utility_function PCを次の命令へ進めます。
def advance_pc(space: AddressSpace, words: int = 1) -> None:
    space.write(Register.PC, space.read(Register.PC) + words)
