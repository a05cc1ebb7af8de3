"""履歴補完の実行設定（config.yaml）"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from shared.constants import (
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    DEFAULT_LOG_FILE,
    DEFAULT_SESSIONS_DIR,
    DEFAULT_TRANSCRIPT_DIR,
    MAX_COMMANDS,
    MAX_FILES,
    YEAR_MONTH_PATTERN,
)

logger = logging.getLogger(__name__)

# config.yaml内のセクション名
CONFIG_SECTION = "enrich_backfill"


def _expand(path: str) -> Path:
    return Path(os.path.expanduser(str(path)))


@dataclass
class HistoryConfig:
    """バックフィル補完の設定"""

    sessions_dir: Path = field(default_factory=lambda: _expand(DEFAULT_SESSIONS_DIR))
    transcript_dir: Path = field(default_factory=lambda: _expand(DEFAULT_TRANSCRIPT_DIR))
    max_files: int = MAX_FILES
    max_commands: int = MAX_COMMANDS
    year_month_pattern: str = YEAR_MONTH_PATTERN
    log_file: Path = field(default_factory=lambda: Path(DEFAULT_LOG_FILE))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryConfig":
        """enrich_backfillセクションから生成（未指定キーはデフォルト）"""
        config = cls()
        if data.get("sessions_dir"):
            config.sessions_dir = _expand(data["sessions_dir"])
        if data.get("transcript_dir"):
            config.transcript_dir = _expand(data["transcript_dir"])
        if data.get("log_file"):
            config.log_file = _expand(data["log_file"])
        if isinstance(data.get("max_files"), int):
            config.max_files = data["max_files"]
        if isinstance(data.get("max_commands"), int):
            config.max_commands = data["max_commands"]
        if data.get("year_month_pattern"):
            config.year_month_pattern = str(data["year_month_pattern"])
        return config


def _config_candidates() -> List[Path]:
    """config.yamlの探索パス

    探索順序:
    1. CLAUDE_PROJECT_DIR環境変数
    2. Path.cwd()
    """
    candidates = []

    project_dir = os.environ.get("CLAUDE_PROJECT_DIR")
    if project_dir:
        candidates.append(Path(project_dir) / CONFIG_DIRNAME / CONFIG_FILENAME)

    try:
        cwd_candidate = Path.cwd() / CONFIG_DIRNAME / CONFIG_FILENAME
        if cwd_candidate not in candidates:
            candidates.append(cwd_candidate)
    except OSError:
        pass

    return candidates


def load_history_config(config_path: Optional[Path] = None) -> HistoryConfig:
    """config.yamlを読み込みHistoryConfigを返す

    ファイル不在・YAML構文エラー時はデフォルト設定にフォールバック。

    Args:
        config_path: 明示的な設定ファイルパス（省略時は探索）

    Returns:
        HistoryConfig
    """
    candidates = [Path(config_path)] if config_path else _config_candidates()

    for path in candidates:
        if not path.exists():
            continue
        logger.info(f"config.yaml発見: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"設定ファイル読み込み失敗: {e}")
            return HistoryConfig()

        section = data.get(CONFIG_SECTION) if isinstance(data, dict) else None
        return HistoryConfig.from_dict(section if isinstance(section, dict) else {})

    logger.info(f"config.yaml未発見: 探索パス={[str(c) for c in candidates]}")
    return HistoryConfig()
