# src/dcpu_core_tracer/arch/dcpu16/instructions/__init__.py
"""
DCPU-16命令セット実装パッケージ。
"""
from dcpu_core_tracer.common.types import Register
from dcpu_core_tracer.core.faults import DivisionByZeroFault
from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.arch.dcpu16.decoder import decode_word
from .control import execute_reserved
from .maps import EXECUTE_MAP, EXTENDED_MAP

# @intent:responsibility 命令ワードをオペコードでディスパッチして実行します。
def execute_instruction(word: int, space: AddressSpace) -> None:
    """
    命令ワードを実行し、アドレス空間の状態を変更します。
    PCは実行前にこの命令の先頭アドレスを指している必要があります。
    """
    pc = space.read(Register.PC)
    instruction = decode_word(word)
    if instruction.opcode == 0x0:
        executor = EXTENDED_MAP.get(instruction.a, execute_reserved)
    else:
        executor = EXECUTE_MAP[instruction.opcode]
    try:
        executor(space, instruction, word)
    except ZeroDivisionError:
        raise DivisionByZeroFault(pc, word) from None
