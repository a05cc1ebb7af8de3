"""TranscriptAnalyzer - トランスクリプトからツール利用状況を抽出"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from domain.models.records import (
    FileEditInvocation,
    ShellInvocation,
    ToolInvocation,
    TranscriptAnalysis,
    UnknownInvocation,
)
from domain.services.focus_classifier import classify_focus
from infrastructure.transcript.transcript_reader import TranscriptReader
from shared.constants import (
    FILE_EDIT_TOOLS,
    MAX_COMMANDS,
    MAX_FILES,
    SHELL_TOOL_NAME,
    USER_MESSAGE_MAX_LEN,
)

logger = logging.getLogger(__name__)

_SYSTEM_REMINDER_RE = re.compile(r"<system-reminder>.*?</system-reminder>", re.DOTALL)


def _str_or_none(value: Any) -> Optional[str]:
    """空でない文字列のみ採用"""
    if isinstance(value, str) and value:
        return value
    return None


def parse_tool_invocation(block: Dict[str, Any]) -> Optional[ToolInvocation]:
    """tool_useブロックをツール種別ごとの型に変換

    Args:
        block: assistantメッセージのcontent要素

    Returns:
        ToolInvocation。tool_useでない・名前がない場合はNone
    """
    if not isinstance(block, dict) or block.get("type") != "tool_use":
        return None

    name = block.get("name")
    if not isinstance(name, str) or not name:
        return None

    tool_input = block.get("input")
    if not isinstance(tool_input, dict):
        tool_input = {}

    if name in FILE_EDIT_TOOLS:
        return FileEditInvocation(name=name, file_path=_str_or_none(tool_input.get(FILE_EDIT_TOOLS[name])))
    if name == SHELL_TOOL_NAME:
        return ShellInvocation(name=name, command=_str_or_none(tool_input.get("command")))
    return UnknownInvocation(name=name)


def extract_first_user_message(records: Iterable[Dict[str, Any]]) -> str:
    """最初のユーザーメッセージを抽出

    contentが文字列ならその先頭500文字。
    リストなら最初の空でないtextブロック（system-reminder除去後）の先頭500文字。
    該当しないuser行（tool_result等）は読み飛ばす。
    """
    for record in records:
        if record.get("type") != "user":
            continue

        message = record.get("message")
        content = message.get("content") if isinstance(message, dict) else None

        if isinstance(content, str):
            return content[:USER_MESSAGE_MAX_LEN]
        if isinstance(content, list):
            for block in content:
                if not isinstance(block, dict) or block.get("type") != "text":
                    continue
                text = block.get("text")
                if not isinstance(text, str):
                    continue
                cleaned = _SYSTEM_REMINDER_RE.sub("", text).strip()
                if cleaned:
                    return cleaned[:USER_MESSAGE_MAX_LEN]
    return ""


def iter_tool_invocations(records: Iterable[Dict[str, Any]]) -> Iterable[ToolInvocation]:
    """assistant行に含まれるツール呼び出しを出現順に返す"""
    for record in records:
        if record.get("type") != "assistant":
            continue

        message = record.get("message")
        blocks = message.get("content") if isinstance(message, dict) else None
        if not isinstance(blocks, list):
            continue

        for block in blocks:
            invocation = parse_tool_invocation(block)
            if invocation is not None:
                yield invocation


class TranscriptAnalyzer:
    """トランスクリプトを解析しツール・ファイル・コマンドを集計する。"""

    def __init__(
        self,
        max_files: int = MAX_FILES,
        max_commands: int = MAX_COMMANDS,
        reader: Optional[TranscriptReader] = None,
    ):
        """初期化

        Args:
            max_files: 変更ファイルの最大保持件数
            max_commands: 実行コマンドの最大保持件数
            reader: TranscriptReaderインスタンス（省略時は新規生成）
        """
        self._max_files = max_files
        self._max_commands = max_commands
        self._reader = reader or TranscriptReader()

    def analyze(self, transcript_path: Union[str, Path]) -> TranscriptAnalysis:
        """.jsonlトランスクリプトを解析

        Args:
            transcript_path: .jsonlファイルパス

        Returns:
            TranscriptAnalysis
        """
        records = self._reader.read_records(transcript_path)
        return self.analyze_records(records)

    def analyze_records(self, records: List[Dict[str, Any]]) -> TranscriptAnalysis:
        """解析済みレコード列から集計"""
        # dictを挿入順保持の集合として使う
        tools_used: Dict[str, None] = {}
        files_modified: Dict[str, None] = {}
        commands_executed: List[str] = []

        for invocation in iter_tool_invocations(records):
            tools_used.setdefault(invocation.name, None)

            if isinstance(invocation, FileEditInvocation) and invocation.file_path:
                files_modified.setdefault(invocation.file_path, None)
            elif isinstance(invocation, ShellInvocation) and invocation.command:
                commands_executed.append(invocation.command)

        files = list(files_modified)[:self._max_files]
        commands = commands_executed[:self._max_commands]

        logger.debug(
            f"解析完了: tools={len(tools_used)}, files={len(files_modified)}, "
            f"commands={len(commands_executed)}"
        )

        return TranscriptAnalysis(
            tools_used=list(tools_used),
            files_modified=files,
            commands_executed=commands,
            first_user_message=extract_first_user_message(records),
            focus=classify_focus(files, commands),
        )
