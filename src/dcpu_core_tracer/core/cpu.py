# dcpu_core_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

from dcpu_core_tracer.transport.address_space import AddressSpace
from dcpu_core_tracer.core.snapshot import Snapshot, Operation, Metadata
from dcpu_core_tracer.core.state import CpuState
from dcpu_core_tracer.core.faults import CpuFault, RunOutcome, RunResult
from dcpu_core_tracer.common.types import SymbolMap, RegisterLayoutInfo

logger = logging.getLogger(__name__)

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    AddressSpaceとのインターフェース、命令サイクルと実行ループの抽象化を提供します。
    """
    # @intent:responsibility アドレス空間への参照と実行カウンタを初期化します。
    # @intent:pre-condition `space`はこのCPUが単独で所有するAddressSpaceである必要があります。
    def __init__(self, space: AddressSpace):
        self._space = space
        self._step_count: int = 0
        self._running: bool = False
        self._symbol_map: SymbolMap = {}
        self._reverse_symbol_map: Dict[int, str] = {}

    @property
    def address_space(self) -> AddressSpace:
        return self._space

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility シンボルマップを設定します。
    def set_symbol_map(self, symbol_map: SymbolMap) -> None:
        """
        シンボルマップ（名前とアドレスの対応表）を設定します。
        """
        self._symbol_map = dict(symbol_map)
        # 逆引きマップを作成して、アドレスからラベルを素早く引けるようにする
        self._reverse_symbol_map = {addr: name for name, addr in symbol_map.items()}

    def get_symbol_map(self) -> SymbolMap:
        return self._symbol_map

    # @intent:responsibility レジスタを初期状態に戻します。
    @abstractmethod
    def reset(self, start_address: int = 0) -> None:
        pass

    # @intent:responsibility 現在のレジスタ状態のコピーを生成します。
    @abstractmethod
    def _capture_state(self) -> CpuState:
        """
        現在のレジスタ値を新しいCpuStateとして返します。
        返されたオブジェクトは以後の実行で変化してはいけません。
        """
        pass

    # @intent:responsibility 与えられた状態をレジスタへ書き戻します。
    @abstractmethod
    def restore_state(self, state: CpuState) -> None:
        pass

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._capture_state()

    # @intent:responsibility PCの指す命令ワードをフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチした命令ワードを副作用なしに解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, word: int, pc: int) -> Operation:
        pass

    # @intent:responsibility 命令ワードを実行し、アドレス空間の状態を更新します。
    @abstractmethod
    def _execute(self, word: int) -> None:
        pass

    # @intent:responsibility run開始時のレジスタ初期化を行います。
    @abstractmethod
    def _on_run_start(self, start_address: Optional[int]) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（ログクリア→フェッチ→デコード→実行→Snapshot生成）を定義します。
    #                  PCの前進は命令ハンドラ自身が責任を持ちます。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUの状態とアクセス履歴を含むSnapshotを返します。
        フォールトはそのまま送出されます。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._space.get_and_clear_activity_log()
        initial_pc = self._capture_state().pc

        # 2. フェッチ
        word = self._fetch()

        # 3. デコード（表示用。オペランドの副作用は発生させない）
        operation = self._decode(word, initial_pc)

        # 4. 実行
        self._execute(word)

        # 5. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        activity = self._space.get_and_clear_activity_log()
        self._step_count += 1

        symbol_label = self._reverse_symbol_map.get(initial_pc, "")
        symbol_info = f"{symbol_label}: " if symbol_label else ""
        symbol_info += operation.mnemonic
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)
        logger.debug("%04X: %s", initial_pc, symbol_info)

        return Snapshot(
            state=self._capture_state(),
            operation=operation,
            metadata=Metadata(step_count=self._step_count, symbol_info=symbol_info),
            memory_activity=activity,
        )

    # @intent:responsibility フェッチ・実行ループを駆動します。
    # @intent:rationale マシンにはHALT命令が無いため、ループを抜ける手段はフォールトか外部からのキャンセルのみです。
    def run(self, start_address: Optional[int] = None, max_steps: Optional[int] = None,
            should_stop: Optional[Callable[[], bool]] = None) -> RunResult:
        """
        命令を繰り返し実行します。各サイクルの先頭で should_stop、stop()、max_steps の順に停止条件を確認します。
        いずれも指定されなければ無制限に実行を続けます。
        フォールトは送出されず、RunResultとして返されます。
        """
        self._on_run_start(start_address)
        self._running = True
        steps = 0
        logger.info("Run started at PC %#06x", self._capture_state().pc)

        try:
            while True:
                if (should_stop is not None and should_stop()) or not self._running:
                    logger.info("Run cancelled after %d steps", steps)
                    return RunResult(RunOutcome.CANCELLED, steps, self._capture_state().pc)
                if max_steps is not None and steps >= max_steps:
                    logger.info("Step limit of %d reached", max_steps)
                    return RunResult(RunOutcome.STEP_LIMIT, steps, self._capture_state().pc)

                pc = self._capture_state().pc
                try:
                    self.step()
                except CpuFault as fault:
                    logger.warning("Run halted by fault: %s", fault)
                    return RunResult(RunOutcome.FAULT, steps, pc, fault)
                steps += 1
        finally:
            self._running = False

    # @intent:responsibility 実行中のrunに停止を要求します。次のサイクルの先頭で停止します。
    def stop(self) -> None:
        self._running = False

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをどのようにグループ化して表示すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, count: int) -> List[Tuple[int, str, str]]:
        """
        指定されたアドレスから count 命令を逆アセンブルし、(address, hex_words, text) のタプルリストを返す。
        """
        pass
