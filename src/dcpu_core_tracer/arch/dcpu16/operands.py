# src/dcpu_core_tracer/arch/dcpu16/operands.py
"""
DCPU-16 オペランド（アドレッシングモード）解決ロジック。

6bitのオペランドフィールドを (値, 書き込み先) の組に解決します。
一部のモードは解決時にPC（後続ワードの消費）やSP（スタック擬似アドレッシング）を変更します。
"""
from typing import NamedTuple, Optional

from dcpu_core_tracer.common.types import GENERAL_REGISTERS, Location, Register, Word
from dcpu_core_tracer.transport.address_space import AddressSpace

# @intent:responsibility オペランドの解決結果を保持します。
# value: 解決された値
# location: 書き込み先。リテラルの場合はNone（書き込み不可）
class Operand(NamedTuple):
    value: Word
    location: Optional[Location]

    @property
    def writable(self) -> bool:
        return self.location is not None

# @intent:responsibility PCの次のワードを読み出し、PCを1進めます。
def _next_word(space: AddressSpace) -> Word:
    value = space.read(space.read(Register.PC) + 1)
    space.increment(Register.PC)
    return value

# --- Addressing Modes ---

# @intent:responsibility register (0x00-0x07)
def addr_register(field: int, space: AddressSpace) -> Operand:
    reg = GENERAL_REGISTERS[field]
    return Operand(space.read(reg), reg)

# @intent:responsibility [register] (0x08-0x0F)
def addr_register_indirect(field: int, space: AddressSpace) -> Operand:
    address = space.read(GENERAL_REGISTERS[field - 0x08])
    return Operand(space.read(address), address)

# @intent:responsibility [register + next word] (0x10-0x17)
# @intent:note アドレスの加算結果はマスクしません（AddressPolicyに委ねます）。
def addr_register_offset(field: int, space: AddressSpace) -> Operand:
    offset = _next_word(space)
    address = space.read(GENERAL_REGISTERS[field - 0x10]) + offset
    return Operand(space.read(address), address)

# @intent:responsibility POP / [SP++] (0x18)
# @intent:note 書き込み先は値を読み出したセル（インクリメント前のSP）です。
def addr_pop(field: int, space: AddressSpace) -> Operand:
    address = space.read(Register.SP)
    return Operand(space.pop(), address)

# @intent:responsibility PEEK / [SP] (0x19)
def addr_peek(field: int, space: AddressSpace) -> Operand:
    return Operand(space.peek(), space.read(Register.SP))

# @intent:responsibility PUSH / [--SP] (0x1A)
# @intent:note 値として読まれた場合はプッシュ前のスタックトップを返しますが、SPのデクリメントは常に発生します。
def addr_push(field: int, space: AddressSpace) -> Operand:
    value = space.peek()
    return Operand(value, space.push())

# @intent:responsibility SP / PC / O (0x1B-0x1D)
def addr_special(field: int, space: AddressSpace) -> Operand:
    reg = SPECIAL_REGISTERS[field]
    return Operand(space.read(reg), reg)

# @intent:responsibility [next word] (0x1E)
def addr_next_word_indirect(field: int, space: AddressSpace) -> Operand:
    address = _next_word(space)
    return Operand(space.read(address), address)

# @intent:responsibility next word (literal) (0x1F)
def addr_next_word_literal(field: int, space: AddressSpace) -> Operand:
    return Operand(_next_word(space), None)

# @intent:responsibility inline literal 0x00-0x1F (0x20-0x3F)
def addr_literal(field: int, space: AddressSpace) -> Operand:
    return Operand(field - 0x20, None)

SPECIAL_REGISTERS = {0x1B: Register.SP, 0x1C: Register.PC, 0x1D: Register.O}

# @intent:map 単独のフィールド値からアドレッシングモード関数へのマッピングテーブル。
_SINGLE_FIELD_MAP = {
    0x18: addr_pop,
    0x19: addr_peek,
    0x1A: addr_push,
    0x1B: addr_special,
    0x1C: addr_special,
    0x1D: addr_special,
    0x1E: addr_next_word_indirect,
    0x1F: addr_next_word_literal,
}

# @intent:responsibility 6bitのオペランドフィールドを解決します。
def resolve_operand(field: int, space: AddressSpace) -> Operand:
    """
    オペランドフィールド (0x00-0x3F) を Operand に解決します。
    後続ワードを消費するモードではPCが1進み、スタック系のモードではSPが変化します。
    """
    if field < 0x08:
        return addr_register(field, space)
    if field < 0x10:
        return addr_register_indirect(field, space)
    if field < 0x18:
        return addr_register_offset(field, space)
    if field < 0x20:
        return _SINGLE_FIELD_MAP[field](field, space)
    if field < 0x40:
        return addr_literal(field, space)
    raise ValueError(f"Operand field {field:#x} is wider than 6 bits.")
