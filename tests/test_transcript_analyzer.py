"""TranscriptAnalyzer 単体テスト"""

import pytest

from domain.models.records import FileEditInvocation, ShellInvocation, UnknownInvocation
from domain.services.transcript_analyzer import (
    TranscriptAnalyzer,
    extract_first_user_message,
    parse_tool_invocation,
)


def _tool(name, **tool_input):
    return {"type": "tool_use", "id": f"toolu_{name}", "name": name, "input": tool_input}


def _assistant(*blocks):
    return {"type": "assistant", "message": {"role": "assistant", "content": list(blocks)}}


def _user(content):
    return {"type": "user", "message": {"role": "user", "content": content}}


# === フィクスチャ ===

@pytest.fixture
def transcript(tmp_path, write_jsonl):
    """レコードを書き出してパスを返す"""
    def _make(records, extra_lines=()):
        return write_jsonl(tmp_path / "session.jsonl", records, extra_lines)
    return _make


# === parse_tool_invocationテスト ===

class TestParseToolInvocation:
    """ツール名による型の振り分け"""

    def test_edit_tool(self):
        inv = parse_tool_invocation(_tool("Edit", file_path="/a.md", old_string="x"))
        assert inv == FileEditInvocation(name="Edit", file_path="/a.md")

    def test_notebook_edit_uses_notebook_path(self):
        inv = parse_tool_invocation(_tool("NotebookEdit", notebook_path="/n.ipynb"))
        assert inv == FileEditInvocation(name="NotebookEdit", file_path="/n.ipynb")

    def test_bash_tool(self):
        inv = parse_tool_invocation(_tool("Bash", command="ls -la"))
        assert inv == ShellInvocation(name="Bash", command="ls -la")

    def test_unknown_tool(self):
        inv = parse_tool_invocation(_tool("Read", file_path="/a.md"))
        assert inv == UnknownInvocation(name="Read")

    def test_missing_input(self):
        """inputがなくても名前は取得できる"""
        inv = parse_tool_invocation({"type": "tool_use", "name": "Write"})
        assert inv == FileEditInvocation(name="Write", file_path=None)

    @pytest.mark.parametrize("block", [
        {"type": "text", "text": "hello"},
        {"type": "tool_use", "name": ""},
        {"type": "tool_use"},
        "not a dict",
    ])
    def test_not_an_invocation(self, block):
        assert parse_tool_invocation(block) is None


# === extract_first_user_messageテスト ===

class TestFirstUserMessage:
    """最初のユーザーメッセージ抽出"""

    def test_string_content(self):
        records = [_user("ブログ記事を書いて"), _user("次のメッセージ")]
        assert extract_first_user_message(records) == "ブログ記事を書いて"

    def test_truncated_to_500(self):
        assert extract_first_user_message([_user("a" * 800)]) == "a" * 500

    def test_block_content_strips_system_reminder(self):
        text = "<system-reminder>ignore\nthis</system-reminder>\n  実際の依頼  "
        records = [_user([{"type": "text", "text": text}])]
        assert extract_first_user_message(records) == "実際の依頼"

    def test_skips_tool_result_user_records(self):
        """textブロックのないuser行は読み飛ばす"""
        records = [
            _user([{"type": "tool_result", "tool_use_id": "t1", "content": "ok"}]),
            _user([{"type": "text", "text": "<system-reminder>only</system-reminder>"}]),
            _user([{"type": "text", "text": "本題"}]),
        ]
        assert extract_first_user_message(records) == "本題"

    def test_no_user_records(self):
        assert extract_first_user_message([_assistant(_tool("Read"))]) == ""


# === analyzeテスト ===

class TestAnalyze:
    """ファイルからの集計"""

    def test_tools_deduplicated(self, transcript):
        """同じツールは1回のみ"""
        path = transcript([
            _assistant(_tool("Read", file_path="/a")),
            _assistant(_tool("Read", file_path="/b"), _tool("Grep", pattern="x")),
            _assistant(_tool("Read", file_path="/c")),
        ])
        result = TranscriptAnalyzer().analyze(path)
        assert result.tools_used == ["Read", "Grep"]

    def test_files_dedup_first_occurrence_order(self, transcript):
        """[A, B, A, C] → [A, B, C]"""
        path = transcript([
            _assistant(_tool("Edit", file_path="/A")),
            _assistant(_tool("Write", file_path="/B")),
            _assistant(_tool("Edit", file_path="/A")),
            _assistant(_tool("MultiEdit", file_path="/C")),
        ])
        result = TranscriptAnalyzer().analyze(path)
        assert result.files_modified == ["/A", "/B", "/C"]

    def test_files_capped_at_20(self, transcript):
        path = transcript([_assistant(_tool("Write", file_path=f"/f{i}.txt")) for i in range(30)])
        result = TranscriptAnalyzer().analyze(path)
        assert result.files_modified == [f"/f{i}.txt" for i in range(20)]

    def test_commands_keep_duplicates_and_order(self, transcript):
        path = transcript([
            _assistant(_tool("Bash", command="ls"), _tool("Bash", command="pwd")),
            _assistant(_tool("Bash", command="ls")),
        ])
        result = TranscriptAnalyzer().analyze(path)
        assert result.commands_executed == ["ls", "pwd", "ls"]

    def test_commands_capped_at_20(self, transcript):
        path = transcript([_assistant(_tool("Bash", command=f"echo {i}")) for i in range(25)])
        result = TranscriptAnalyzer().analyze(path)
        assert result.commands_executed == [f"echo {i}" for i in range(20)]

    def test_custom_caps(self, transcript):
        path = transcript([_assistant(_tool("Bash", command=f"echo {i}")) for i in range(5)])
        result = TranscriptAnalyzer(max_commands=2).analyze(path)
        assert result.commands_executed == ["echo 0", "echo 1"]

    def test_malformed_lines_ignored(self, transcript):
        """壊れた行・非オブジェクト行は無視して続行"""
        path = transcript(
            [_user("はじめに"), _assistant(_tool("Bash", command="make"))],
            extra_lines=['{"type": "assistant", "message": {"content": [', "42", "", "not json"],
        )
        result = TranscriptAnalyzer().analyze(path)
        assert result.first_user_message == "はじめに"
        assert result.commands_executed == ["make"]

    def test_non_list_assistant_content_ignored(self, transcript):
        path = transcript([{"type": "assistant", "message": {"content": "plain text"}}])
        result = TranscriptAnalyzer().analyze(path)
        assert result.tools_used == []

    def test_edit_without_path_records_tool_only(self, transcript):
        path = transcript([_assistant(_tool("Edit"), _tool("Bash"))])
        result = TranscriptAnalyzer().analyze(path)
        assert result.tools_used == ["Edit", "Bash"]
        assert result.files_modified == []
        assert result.commands_executed == []

    def test_focus_classified_from_results(self, transcript):
        path = transcript([_assistant(_tool("Edit", file_path="/site/blog/post.md"))])
        assert TranscriptAnalyzer().analyze(path).focus == "blog-work"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.jsonl"
        path.write_text("")
        result = TranscriptAnalyzer().analyze(path)
        assert result.tools_used == []
        assert result.first_user_message == ""
        assert result.focus == "development-session"

    def test_missing_file_raises(self, tmp_path):
        """ファイル不在は呼び出し側で扱う"""
        with pytest.raises(FileNotFoundError):
            TranscriptAnalyzer().analyze(tmp_path / "missing.jsonl")
