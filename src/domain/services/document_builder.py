"""補完済みセッション文書の生成"""

from typing import Dict

from domain.models.records import TranscriptAnalysis
from shared.constants import ENRICHED_SOURCE

NONE_RECORDED = "None recorded"

_TEMPLATE = """\
---
capture_type: SESSION
timestamp: {timestamp}
session_id: {session_id}
executor: {executor}
source: {source}
---

# Session: {focus}

**Session ID:** {session_id}
**Ended:** {timestamp}

---

## Summary

{summary}

---

## Tools Used

{tools}

---

## Files Modified

{files}

---

## Commands Executed

{commands}

---

*Session summary enriched by PAI History System from transcript*
"""


def _bullet_list(items, code: bool = False) -> str:
    if not items:
        return f"- {NONE_RECORDED}"
    if code:
        return "\n".join(f"- `{item}`" for item in items)
    return "\n".join(f"- {item}" for item in items)


def _command_block(commands) -> str:
    if not commands:
        return NONE_RECORDED
    return "```bash\n" + "\n".join(commands) + "\n```"


def build_enriched_document(frontmatter: Dict[str, str], analysis: TranscriptAnalysis) -> str:
    """フロントマターと解析結果から補完済み文書を生成

    Args:
        frontmatter: 元文書のフロントマター（timestamp, session_id, executor）
        analysis: トランスクリプト解析結果

    Returns:
        Markdown文書
    """
    return _TEMPLATE.format(
        timestamp=frontmatter.get("timestamp", ""),
        session_id=frontmatter.get("session_id", ""),
        executor=frontmatter.get("executor", ""),
        source=ENRICHED_SOURCE,
        focus=analysis.focus,
        summary=analysis.first_user_message or analysis.focus,
        tools=_bullet_list(analysis.tools_used),
        files=_bullet_list(analysis.files_modified, code=True),
        commands=_command_block(analysis.commands_executed),
    )
