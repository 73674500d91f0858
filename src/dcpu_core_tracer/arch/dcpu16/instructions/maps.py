# src/dcpu_core_tracer/arch/dcpu16/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from . import load
from . import alu
from . import control

# @intent:map 基本命令のオペコード (0x1-0xF) から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    0x1: load.execute_set,
    0x2: alu.execute_add,
    0x3: alu.execute_sub,
    0x4: alu.execute_mul,
    0x5: alu.execute_div,
    0x6: alu.execute_mod,
    0x7: alu.execute_shl,
    0x8: alu.execute_shr,
    0x9: alu.execute_and,
    0xA: alu.execute_bor,
    0xB: alu.execute_xor,
    0xC: control.execute_ife,
    0xD: control.execute_ifn,
    0xE: control.execute_ifg,
    0xF: control.execute_ifb,
}

# @intent:map 拡張命令 (opcode 0x0) のAフィールドセレクタから実行関数へのマッピングテーブル。
EXTENDED_MAP = {
    0x01: control.execute_jsr,
}

# @intent:map 表示用のニーモニック。
MNEMONICS = {
    0x1: "SET", 0x2: "ADD", 0x3: "SUB", 0x4: "MUL", 0x5: "DIV",
    0x6: "MOD", 0x7: "SHL", 0x8: "SHR", 0x9: "AND", 0xA: "BOR",
    0xB: "XOR", 0xC: "IFE", 0xD: "IFN", 0xE: "IFG", 0xF: "IFB",
}

EXTENDED_MNEMONICS = {
    0x01: "JSR",
}
