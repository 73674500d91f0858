# src/dcpu_core_tracer/arch/dcpu16/disassembler.py
"""
DCPU-16 逆アセンブラ。

アドレス空間をログなしで参照し、オペランドを解決せずに命令をテキストへ変換します。
PCやSPは一切変更しません。
"""
from typing import List, Optional, Tuple

from dcpu_core_tracer.common.types import GENERAL_REGISTERS, WORD_MASK
from dcpu_core_tracer.core.snapshot import Operation
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import decode_word, has_trailing_word
from dcpu_core_tracer.arch.dcpu16.instructions.maps import EXTENDED_MNEMONICS, MNEMONICS

_STACK_AND_SPECIAL = {
    0x18: "POP", 0x19: "PEEK", 0x1A: "PUSH",
    0x1B: "SP", 0x1C: "PC", 0x1D: "O",
}

# @intent:responsibility オペランドフィールドを表示用の文字列に変換します。
def format_operand(field: int, next_word: Optional[int] = None) -> str:
    if field < 0x08:
        return GENERAL_REGISTERS[field].value
    if field < 0x10:
        return f"[{GENERAL_REGISTERS[field - 0x08].value}]"
    if field < 0x18:
        return f"[0x{next_word:04X}+{GENERAL_REGISTERS[field - 0x10].value}]"
    if field in _STACK_AND_SPECIAL:
        return _STACK_AND_SPECIAL[field]
    if field == 0x1E:
        return f"[0x{next_word:04X}]"
    if field == 0x1F:
        return f"0x{next_word:04X}"
    return f"0x{field - 0x20:02X}"

# @intent:responsibility 指定アドレスの命令をOperationにデコードします。
def decode_operation(space: AddressSpace, address: int) -> Operation:
    word = space.inspect(address)
    instruction = decode_word(word)
    cursor = address + 1
    trailing: List[int] = []

    # 後続ワードはAのものが先に並ぶ
    def operand_text(field: int) -> str:
        nonlocal cursor
        if has_trailing_word(field):
            value = space.inspect(cursor & WORD_MASK)
            trailing.append(value)
            cursor += 1
            return format_operand(field, value)
        return format_operand(field)

    if instruction.opcode == 0x0:
        mnemonic = EXTENDED_MNEMONICS.get(instruction.a)
        if mnemonic is None:
            mnemonic = "UNKNOWN"
            if has_trailing_word(instruction.a):
                trailing.append(space.inspect(cursor & WORD_MASK))
                cursor += 1
            operands = [f"0x{instruction.a:02X}", operand_text(instruction.b)]
        else:
            operands = [operand_text(instruction.b)]
    else:
        mnemonic = MNEMONICS[instruction.opcode]
        operands = [operand_text(instruction.a), operand_text(instruction.b)]

    return Operation(
        opcode_hex=f"{word:04X}",
        mnemonic=mnemonic,
        operands=operands,
        operand_words=trailing,
        length=1 + len(trailing),
    )

# @intent:responsibility 指定アドレスから count 命令を逆アセンブルします。
def disassemble(space: AddressSpace, start_addr: int, count: int) -> List[Tuple[int, str, str]]:
    result = []
    address = start_addr
    for _ in range(count):
        op = decode_operation(space, address)
        hex_words = " ".join([op.opcode_hex] + [f"{w:04X}" for w in op.operand_words])
        text = op.mnemonic
        if op.operands:
            text += " " + ", ".join(op.operands)
        result.append((address, hex_words, text))
        address = (address + op.length) & WORD_MASK
    return result
