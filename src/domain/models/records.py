"""データモデル定義"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class FileEditInvocation:
    """ファイル編集系ツール呼び出し（Edit / Write / MultiEdit / NotebookEdit）"""

    name: str
    file_path: Optional[str]


@dataclass(frozen=True)
class ShellInvocation:
    """シェル実行ツール呼び出し（Bash）"""

    name: str
    command: Optional[str]


@dataclass(frozen=True)
class UnknownInvocation:
    """上記以外のツール呼び出し（名前のみ記録）"""

    name: str


ToolInvocation = Union[FileEditInvocation, ShellInvocation, UnknownInvocation]


@dataclass
class TranscriptAnalysis:
    """トランスクリプト解析結果"""

    tools_used: List[str] = field(default_factory=list)
    files_modified: List[str] = field(default_factory=list)
    commands_executed: List[str] = field(default_factory=list)
    first_user_message: str = ""
    focus: str = "development-session"


@dataclass
class EnrichmentSummary:
    """バックフィル補完処理の集計"""

    enriched: int = 0
    no_transcript: int = 0
    errors: int = 0
    skipped: int = 0


@dataclass
class Identity:
    """アシスタントのアイデンティティ（解決済み）"""

    name: str
    full_name: str
    display_name: str
    voice_id: str
    color: str
    role: Optional[str] = None
    voice: Optional[Dict[str, Any]] = None
    personality: Optional[Dict[str, Any]] = None


@dataclass
class Principal:
    """プリンシパル（所有者）情報（解決済み）"""

    name: str
    pronunciation: str
    timezone: str
    social: Optional[Dict[str, str]] = None
