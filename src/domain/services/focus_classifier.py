"""セッションの作業内容ラベル判定"""

import re
from typing import Callable, List, Sequence, Tuple

DEFAULT_FOCUS = "development-session"

_EXTENSION_RE = re.compile(r"\.(md|ts|js)\Z")


def _any_path(*fragments: str) -> Callable[[List[str], Sequence[str]], bool]:
    """小文字化したパスにいずれかの断片を含むか"""
    def _match(paths: List[str], commands: Sequence[str]) -> bool:
        return any(fragment in path for path in paths for fragment in fragments)
    return _match


def _any_command(fragment: str) -> Callable[[List[str], Sequence[str]], bool]:
    """コマンドに断片を含むか（大文字小文字を区別）"""
    def _match(paths: List[str], commands: Sequence[str]) -> bool:
        return any(fragment in command for command in commands)
    return _match


# 評価順に並べる（先勝ち）
FOCUS_RULES: List[Tuple[str, Callable[[List[str], Sequence[str]], bool]]] = [
    ("blog-work", _any_path("/blog/", "/posts/")),
    ("hook-development", _any_path("/hooks/")),
    ("skill-updates", _any_path("/skills/")),
    ("agent-work", _any_path("/agents/")),
    ("testing-session", _any_command("test")),
    ("git-operations", _any_command("git commit")),
    ("deployment", _any_command("deploy")),
]


def classify_focus(files: Sequence[str], commands: Sequence[str]) -> str:
    """変更ファイルと実行コマンドからセッションのラベルを決定

    Args:
        files: 変更ファイルパス（出現順）
        commands: 実行コマンド（出現順）

    Returns:
        ラベル文字列（例: "blog-work", "<name>-work", "development-session"）
    """
    lowered = [f.lower() for f in files]
    for label, matches in FOCUS_RULES:
        if matches(lowered, commands):
            return label

    if files:
        main_file = _EXTENSION_RE.sub("", files[0].split("/")[-1])
        if main_file:
            return f"{main_file}-work"

    return DEFAULT_FOCUS
