# src/dcpu_core_tracer/arch/dcpu16/instructions/load.py
"""
転送命令（SET）の実装。
"""
from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import Instruction
from .base import advance_pc, resolve_operands, store

# --- SET ---
# @intent:responsibility SET a, b を実行します。
# @intent:note 書き込み先がPCの場合、その書き込み自体が分岐であるためPCを進めません。
def execute_set(space: AddressSpace, instruction: Instruction, word: int) -> None:
    _, out, b = resolve_operands(instruction, space)
    store(space, out, b)
    if out is not Register.PC:
        advance_pc(space)
