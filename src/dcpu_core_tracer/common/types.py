"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスやレジスタ名を定義します。
"""
from enum import Enum
from typing import Dict, List, NamedTuple, Union

# @intent:data_structure 16bit符号なしワード。マシンの基本単位。
Word = int

# @intent:constant ワード値のマスク。全ての書き込みはこの範囲に切り詰められます。
WORD_MASK = 0xFFFF

# @intent:responsibility 名前付きレジスタを定義します。
# @intent:rationale 値はUI/設定ファイルで使われる大文字表記と一致させます。
class Register(Enum):
    A = "A"
    B = "B"
    C = "C"
    X = "X"
    Y = "Y"
    Z = "Z"
    I = "I"
    J = "J"
    SP = "SP"
    PC = "PC"
    O = "O"

    # @intent:responsibility 大文字小文字を問わずレジスタ名からRegisterを引きます。
    @classmethod
    def from_name(cls, name: str) -> "Register":
        return cls(name.upper())

# @intent:constant オペランドフィールド 0x00-0x07 に対応する汎用レジスタの並び。
GENERAL_REGISTERS = (
    Register.A, Register.B, Register.C, Register.X,
    Register.Y, Register.Z, Register.I, Register.J,
)

# @intent:data_structure アドレス空間上の位置。数値のメモリセルか名前付きレジスタ。
Location = Union[int, Register]

# @intent:data_structure シンボル名とアドレスをマッピングする辞書の型エイリアス。
# Loader, CPU, Configなど複数のレイヤーで共通して使用されます。
SymbolMap = Dict[str, int]

# @intent:data_structure 単一のレジスタの表示定義。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (DCPUでは常に16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Special"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
