# dcpu_core_tracer/transport/address_space.py
"""
Transport Layer (統合アドレス空間)

このモジュールは、64Kワードのメモリセルと名前付きレジスタを単一のアドレス空間として
抽象化し、読み書きアクセスとスタック擬似アドレッシング（POP/PEEK/PUSH）を提供する責務を負います。
マシンの可変状態は全てこのオブジェクトが所有します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from dcpu_core_tracer.common.types import Location, Register, Word, WORD_MASK

# @intent:responsibility アクセスを記録するためのタイプを定義します。
class AccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリセルに対して行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: Word # 16bit value
    access_type: AccessType
    previous_data: Optional[Word] = None # WRITE時の上書き前の値

# @intent:responsibility 数値アドレスの扱い方（範囲外アドレスのポリシー）を定義します。
# @intent:rationale 値は常にマスクされますが、アドレスのマスクは実機の慣習にすぎないため選択可能にします。
class AddressPolicy(Enum):
    SPARSE = "sparse" # アドレスをそのままキーとして扱う（範囲チェックなし）
    WRAP = "wrap"     # アドレスを 0x0000-0xFFFF にマスクする

# @intent:responsibility メモリセルとレジスタの統合アドレス空間を管理します。
class AddressSpace:
    """
    メモリセル（数値アドレス）と11個の名前付きレジスタを保持するアドレス空間。
    一度も書き込まれていない位置は 0 として読み出されます。
    どの操作も例外を送出しません。
    """
    # @intent:responsibility ゼロ初期化されたアドレス空間とアクセスログを初期化します。
    def __init__(self, policy: AddressPolicy = AddressPolicy.SPARSE):
        self._policy = policy
        self._cells: Dict[int, Word] = {}
        self._registers: Dict[Register, Word] = {reg: 0 for reg in Register}
        self._activity_log: List[MemoryAccess] = []

    @property
    def policy(self) -> AddressPolicy:
        return self._policy

    # @intent:responsibility ポリシーに従って数値アドレスを正規化します。
    def _normalize(self, address: int) -> int:
        if self._policy is AddressPolicy.WRAP:
            return address & WORD_MASK
        return address

    # @intent:responsibility アクセスをログに記録します。
    def _log_access(self, address: int, data: Word, access_type: AccessType,
                    previous_data: Optional[Word] = None) -> None:
        self._activity_log.append(MemoryAccess(address, data, access_type, previous_data))

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        """
        現在のアクセスログを返し、内部ログをクリアします。
        """
        log = self._activity_log
        self._activity_log = []
        return log

    # @intent:responsibility 指定された位置からワードを読み出します。
    # @intent:post-condition 未書き込みの位置は 0 を返します。
    def read(self, location: Location) -> Word:
        """
        レジスタまたはメモリセルの値を読み出します。メモリセルへのアクセスはログに記録されます。
        """
        if isinstance(location, Register):
            return self._registers[location]
        address = self._normalize(location)
        data = self._cells.get(address, 0)
        self._log_access(address, data, AccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定された位置の値を読み出します。
    def inspect(self, location: Location) -> Word:
        """
        UIやテスト、逆アセンブラ用のログなし読み出し。
        """
        if isinstance(location, Register):
            return self._registers[location]
        return self._cells.get(self._normalize(location), 0)

    # @intent:responsibility 指定された位置にワードを書き込みます。
    # @intent:post-condition 格納値は常に 0 <= v <= 0xFFFF を満たします。
    def write(self, location: Location, value: int) -> None:
        value &= WORD_MASK
        if isinstance(location, Register):
            self._registers[location] = value
            return
        address = self._normalize(location)
        previous = self._cells.get(address, 0)
        self._cells[address] = value
        self._log_access(address, value, AccessType.WRITE, previous)

    def increment(self, location: Location) -> None:
        self.write(location, self.read(location) + 1)

    def decrement(self, location: Location) -> None:
        self.write(location, self.read(location) - 1)

    # @intent:responsibility 位置に格納された値をアドレスとみなし、その先を読み出します。
    # @intent:rationale 全ての間接アドレッシングと命令フェッチはこの操作を経由します。
    def dereference(self, location: Location) -> Word:
        return self.read(self.read(location))

    # --- スタック擬似アドレッシング ---

    # @intent:responsibility スタックトップを読み出し、その後SPをインクリメントします。
    def pop(self) -> Word:
        value = self.dereference(Register.SP)
        self.increment(Register.SP)
        return value

    # @intent:responsibility SPを動かさずにスタックトップを読み出します。
    def peek(self) -> Word:
        return self.dereference(Register.SP)

    # @intent:responsibility SPをデクリメントし、新しいSPの値を書き込み先アドレスとして返します。
    # @intent:pre-condition 書き込み先アドレスの計算より前にSPが更新されます。
    def push(self) -> int:
        self.decrement(Register.SP)
        return self.read(Register.SP)

    # @intent:responsibility 値をスタックにプッシュします。
    def push_value(self, value: int) -> None:
        self.write(self.push(), value)

    # --- 外部ローダー/インスペクタ向け ---

    # @intent:responsibility ログを残さずにメモリセルへ書き込みます。
    # @intent:rationale プログラムのインストールや状態の巻き戻しは実行履歴に含めないためのバックドアです。
    def load(self, address: int, value: int) -> None:
        self._cells[self._normalize(address)] = value & WORD_MASK

    # @intent:responsibility (address, word) の組を順にロードします。
    def load_pairs(self, pairs: Iterable[Tuple[int, int]]) -> None:
        for address, value in pairs:
            self.load(address, value)

    # @intent:responsibility 書き込み済みのメモリセルをアドレス順に返します。
    def memory_items(self) -> List[Tuple[int, Word]]:
        return sorted(self._cells.items())
