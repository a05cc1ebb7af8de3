"""enrich-backfill コマンド実装

機能:
1. セッションディレクトリ配下の年月ディレクトリ（例: 2026-01）を走査
2. source: backfill のセッションファイルを対象に、同じsession_idのトランスクリプトを解析
3. ツール・変更ファイル・実行コマンドを補完した文書で上書き
"""

import logging
import re
import sys
from pathlib import Path
from typing import List, Optional

from domain.models.records import EnrichmentSummary
from domain.services.document_builder import build_enriched_document
from domain.services.frontmatter_parser import parse_frontmatter
from domain.services.transcript_analyzer import TranscriptAnalyzer
from infrastructure.config.history_config import HistoryConfig
from shared.constants import BACKFILL_SOURCE

logger = logging.getLogger(__name__)


class EnrichBackfillCommand:
    """バックフィルセッション補完コマンド"""

    def __init__(self, config: Optional[HistoryConfig] = None, dry_run: bool = False):
        """初期化

        Args:
            config: 実行設定（省略時はデフォルト）
            dry_run: Trueの場合ファイルを書き換えない
        """
        self.config = config or HistoryConfig()
        self.dry_run = dry_run
        self.analyzer = TranscriptAnalyzer(
            max_files=self.config.max_files,
            max_commands=self.config.max_commands,
        )

    def execute(self) -> int:
        """補完を実行しサマリーを出力"""
        summary = self.run()
        print()
        print(
            f"Done. Enriched: {summary.enriched}, "
            f"No transcript: {summary.no_transcript}, Errors: {summary.errors}"
        )
        return 0

    def run(self) -> EnrichmentSummary:
        """全年月ディレクトリを処理

        Returns:
            EnrichmentSummary
        """
        summary = EnrichmentSummary()
        sessions_dir = self.config.sessions_dir

        if not sessions_dir.is_dir():
            logger.warning(f"セッションディレクトリ不在: {sessions_dir}")
            print(f"セッションディレクトリが存在しません: {sessions_dir}", file=sys.stderr)
            return summary

        mode = " (dry-run)" if self.dry_run else ""
        logger.info(f"補完開始{mode}: sessions={sessions_dir}, transcripts={self.config.transcript_dir}")

        for ym_dir in self._find_year_month_dirs(sessions_dir):
            for session_file in sorted(ym_dir.glob("*.md")):
                self._process_file(session_file, summary)

        logger.info(
            f"補完完了: enriched={summary.enriched}, no_transcript={summary.no_transcript}, "
            f"errors={summary.errors}, skipped={summary.skipped}"
        )
        return summary

    def _find_year_month_dirs(self, sessions_dir: Path) -> List[Path]:
        """年月パターンに一致するサブディレクトリ"""
        pattern = re.compile(self.config.year_month_pattern)
        return sorted(
            d for d in sessions_dir.iterdir()
            if d.is_dir() and pattern.fullmatch(d.name)
        )

    def transcript_path_for(self, session_id: str) -> Path:
        """session_idに対応するトランスクリプトのパス"""
        return self.config.transcript_dir / f"{session_id}.jsonl"

    def _process_file(self, session_file: Path, summary: EnrichmentSummary) -> None:
        """1ファイルを処理（例外は集計して継続）"""
        try:
            fm = parse_frontmatter(session_file.read_text(encoding="utf-8"))
            if not fm or fm.get("source") != BACKFILL_SOURCE:
                summary.skipped += 1
                return

            session_id = fm.get("session_id", "")
            transcript_path = self.transcript_path_for(session_id) if session_id else None
            if transcript_path is None or not transcript_path.exists():
                logger.debug(f"トランスクリプト不在: {session_file.name} (session={session_id})")
                summary.no_transcript += 1
                return

            analysis = self.analyzer.analyze(transcript_path)
            document = build_enriched_document(fm, analysis)
            if not self.dry_run:
                session_file.write_text(document, encoding="utf-8")

            summary.enriched += 1
            logger.info(f"補完: {session_file.name} focus={analysis.focus}")
            print(f"  enriched: {session_file.name}")
        except Exception as e:
            logger.error(f"処理エラー {session_file.name}: {e}")
            print(f"  error processing {session_file.name}: {e}", file=sys.stderr)
            summary.errors += 1
