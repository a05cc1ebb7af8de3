"""設定読み込み"""

from infrastructure.config.history_config import HistoryConfig, load_history_config

__all__ = [
    "HistoryConfig",
    "load_history_config",
]
