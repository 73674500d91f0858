# src/dcpu_core_tracer/arch/dcpu16/instructions/alu.py
"""
算術・論理演算命令の実装。

全て16bit符号なし演算です。Oレジスタへの書き込みは結果の書き込みより先に行います。
ADD/SUBのOの極性は一般的なキャリーフラグとは異なりますが、そのまま再現します。
"""
from dcpu_core_tracer.common.types import Register, WORD_MASK
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import Instruction
from .base import advance_pc, resolve_operands, store

# --- ADD ---
# @intent:responsibility a + b。桁あふれが無い場合にO=1、ある場合にO=0。
def execute_add(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    total = a + b
    space.write(Register.O, 1 if total < 0x10000 else 0)
    store(space, out, total & WORD_MASK)
    advance_pc(space)

# --- SUB ---
# @intent:responsibility a - b。差が正の場合にO=0xFFFF、それ以外はO=0。
def execute_sub(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    diff = a - b
    space.write(Register.O, 0xFFFF if diff > 0 else 0)
    store(space, out, diff & WORD_MASK)
    advance_pc(space)

# --- MUL ---
def execute_mul(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    product = a * b
    space.write(Register.O, (product >> 16) & WORD_MASK)
    store(space, out, product & WORD_MASK)
    advance_pc(space)

# --- DIV ---
# @intent:responsibility a / b（整数除算）。
# @intent:post-condition b = 0 の場合はZeroDivisionErrorが送出され、O・書き込み先・PCは変更されません。
def execute_div(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    overflow = ((a >> 16) // b) & WORD_MASK
    space.write(Register.O, overflow)
    store(space, out, (a // b) & WORD_MASK)
    advance_pc(space)

# --- MOD ---
def execute_mod(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    store(space, out, 0 if b == 0 else a % b)
    advance_pc(space)

# --- SHL ---
def execute_shl(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    shifted = a << b
    space.write(Register.O, (shifted >> 16) & WORD_MASK)
    store(space, out, shifted & WORD_MASK)
    advance_pc(space)

# --- SHR ---
def execute_shr(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    space.write(Register.O, ((a << 16) >> b) & WORD_MASK)
    store(space, out, (a >> b) & WORD_MASK)
    advance_pc(space)

# --- AND / BOR / XOR ---
def execute_and(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    store(space, out, a & b)
    advance_pc(space)

def execute_bor(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    store(space, out, a | b)
    advance_pc(space)

def execute_xor(space: AddressSpace, instruction: Instruction, word: int) -> None:
    a, out, b = resolve_operands(instruction, space)
    store(space, out, a ^ b)
    advance_pc(space)
