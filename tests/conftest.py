"""pytest設定 - テストモジュールのパス設定と共通フィクスチャ"""

import json
import sys
from pathlib import Path

import pytest

# プロジェクトルートとsrcディレクトリのパス
project_root = Path(__file__).parent.parent
src_dir = project_root / "src"

# 正しいパスを先頭に追加（既存の場合は一度削除してから先頭へ）
for path in [str(src_dir), str(project_root)]:
    if path in sys.path:
        sys.path.remove(path)
    sys.path.insert(0, path)


@pytest.fixture
def write_jsonl():
    """レコードのリストを.jsonlとして書き出すヘルパー"""
    def _write(path: Path, records, extra_lines=()):
        with open(path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
            for line in extra_lines:
                f.write(line + "\n")
        return path
    return _write
