"""共通定数"""

# 解析結果に保持する最大件数（超過分は切り捨て）
MAX_FILES = 20
MAX_COMMANDS = 20

# 最初のユーザーメッセージの最大長
USER_MESSAGE_MAX_LEN = 500

# セッションファイルのsourceタグ
BACKFILL_SOURCE = "backfill"
ENRICHED_SOURCE = "backfill-enriched"

# 年月ディレクトリ名（例: 2026-01）
YEAR_MONTH_PATTERN = r"^\d{4}-\d{2}$"

# ファイル編集系ツール名 → パスを持つ入力フィールド名
FILE_EDIT_TOOLS = {
    "Edit": "file_path",
    "Write": "file_path",
    "MultiEdit": "file_path",
    "NotebookEdit": "notebook_path",
}

# シェル実行ツール名
SHELL_TOOL_NAME = "Bash"

# デフォルトのディレクトリ（~は読み込み時に展開）
DEFAULT_SESSIONS_DIR = "~/.claude/history/sessions"
DEFAULT_TRANSCRIPT_DIR = "~/.claude/projects/-Users-kimes-Projects"
DEFAULT_SETTINGS_PATH = "~/.claude/settings.json"
DEFAULT_LOG_FILE = "/tmp/kai_history_debug.log"

# プロジェクト設定ディレクトリ
CONFIG_DIRNAME = ".kai-history"
CONFIG_FILENAME = "config.yaml"
