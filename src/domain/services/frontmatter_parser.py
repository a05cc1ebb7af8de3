"""Markdownフロントマター解析"""

import re
from typing import Dict, Optional

# 先頭の --- で囲まれたブロック
_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---", re.DOTALL)


def parse_frontmatter(content: str) -> Optional[Dict[str, str]]:
    """文書先頭のフロントマターを key/value 辞書として取得

    最初のコロンのみを区切りとして扱うため、値に含まれるコロンは保持される。
    コロンを含まない行、キーが空の行は無視する。

    Args:
        content: 文書全体の文字列

    Returns:
        トリム済みキー → トリム済み値の辞書。フロントマターがなければNone
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        return None

    fm: Dict[str, str] = {}
    for line in match.group(1).split("\n"):
        idx = line.find(":")
        if idx > 0:
            fm[line[:idx].strip()] = line[idx + 1:].strip()
    return fm
