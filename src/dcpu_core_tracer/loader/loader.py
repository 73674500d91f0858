# dcpu_core_tracer/loader/loader.py
"""
プログラムローダーモジュール。

ワード配列、(address, word) の組、16進テキスト形式のプログラムを
実行開始前のアドレス空間へインストールします。
"""
import re
from typing import Iterable, List, Sequence, Tuple

from dcpu_core_tracer.common.types import WORD_MASK
from dcpu_core_tracer.transport.address_space import AddressSpace

# @intent:constant "0010:" のようなロードアドレス指定。
_ORIGIN_PATTERN = re.compile(r"^([0-9A-Fa-f]+)\s*:\s*(.*)$")

class ProgramLoader:
    """
    プログラムをアドレス空間へロードするローダー。
    ロードはアクセスログに残らないバックドア（AddressSpace.load）経由で行います。
    """
    # @intent:responsibility 連続したワード配列を origin から配置します。
    def load_words(self, space: AddressSpace, words: Sequence[int], origin: int = 0) -> int:
        """配置したワード数を返します。"""
        for offset, word in enumerate(words):
            space.load(origin + offset, word)
        return len(words)

    # @intent:responsibility (address, word) の組を順にロードします。後の組が先の組を上書きします。
    def load_pairs(self, space: AddressSpace, pairs: Iterable[Tuple[int, int]]) -> None:
        space.load_pairs(pairs)

    # @intent:responsibility 16進テキストを (address, word) の組のリストに変換します。
    # @intent:pre-condition 各ワードは16bitに収まる16進数である必要があります。
    def parse_hex_text(self, text: str, origin: int = 0) -> List[Tuple[int, int]]:
        """
        空白区切りの16進ワード列を解析します。';' 以降はコメントです。
        行頭に "ADDR:" がある場合、その行の配置アドレスをADDRに移動します。
        """
        pairs: List[Tuple[int, int]] = []
        cursor = origin
        for line_num, line in enumerate(text.splitlines(), 1):
            comment_start = line.find(';')
            if comment_start != -1:
                line = line[:comment_start]
            line = line.strip()
            if not line:
                continue

            match = _ORIGIN_PATTERN.match(line)
            if match:
                cursor = int(match.group(1), 16)
                line = match.group(2)

            for token in line.split():
                if token.lower().startswith("0x"):
                    token = token[2:]
                try:
                    word = int(token, 16)
                except ValueError:
                    raise ValueError(f"Invalid hex word on line {line_num}: {token!r}") from None
                if word > WORD_MASK:
                    raise ValueError(f"Word {token!r} on line {line_num} does not fit in 16 bits")
                pairs.append((cursor, word))
                cursor += 1
        return pairs

    # @intent:responsibility 16進テキストファイルを読み込み、アドレス空間へロードします。
    def load_hex_file(self, file_path: str, space: AddressSpace, origin: int = 0) -> int:
        with open(file_path, 'r') as f:
            pairs = self.parse_hex_text(f.read(), origin)
        self.load_pairs(space, pairs)
        return len(pairs)
