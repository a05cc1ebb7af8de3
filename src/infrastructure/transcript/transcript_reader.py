"""TranscriptReader - .jsonlトランスクリプトの行単位読み込み"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

logger = logging.getLogger(__name__)


def parse_record(line: str) -> Optional[Dict[str, Any]]:
    """1行をJSONレコードとして解析

    末尾の書きかけ行や壊れた行が混在しうるため、解析できない行は
    例外を投げずNoneを返す（呼び出し側でスキップする）。

    Args:
        line: JSON文字列

    Returns:
        オブジェクト型のレコード。空行・解析失敗・非オブジェクトはNone
    """
    line = line.strip()
    if not line:
        return None
    try:
        entry = json.loads(line)
    except (ValueError, RecursionError):
        return None
    if not isinstance(entry, dict):
        return None
    return entry


def iter_records(lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
    """解析できた行のみをレコードとして順に返す

    Args:
        lines: .jsonlの各行

    Yields:
        レコード辞書
    """
    dropped = 0
    for line in lines:
        record = parse_record(line)
        if record is None:
            if line.strip():
                dropped += 1
            continue
        yield record
    if dropped:
        logger.debug(f"解析不能行をスキップ: {dropped}行")


class TranscriptReader:
    """トランスクリプトファイルの読み込み。"""

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding

    def read_records(self, transcript_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """.jsonlファイル全体を読み込みレコードのリストを返す

        Args:
            transcript_path: .jsonlファイルパス

        Returns:
            レコードのリスト（ファイル内の出現順）
        """
        path = Path(transcript_path)
        # 書きかけの末尾行などの不正バイトは置換し、その行だけJSON解析で落とす
        content = path.read_text(encoding=self._encoding, errors="replace")
        records = list(iter_records(content.split("\n")))
        logger.debug(f"トランスクリプト読み込み: {path.name}, {len(records)}レコード")
        return records
