#!/usr/bin/env python3
"""kai-history CLI エントリーポイント"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path


def _setup_logging(log_file: Path, debug: bool = False) -> None:
    """ロギングの設定（ファイルのみに出力）"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        handlers=[logging.FileHandler(log_file)]
    )


def main(argv=None):
    """メインエントリーポイント"""
    parser = argparse.ArgumentParser(
        prog="kai-history",
        description="セッション履歴ツール - バックフィル補完・設定解決CLI"
    )
    parser.add_argument(
        "--version", action="store_true", help="バージョン表示"
    )
    parser.add_argument(
        "--debug", action="store_true", help="DEBUGレベルでログ出力"
    )

    subparsers = parser.add_subparsers(dest="command", help="サブコマンド")

    # enrich-backfill サブコマンド
    enrich_parser = subparsers.add_parser(
        "enrich-backfill",
        help="バックフィルセッションをトランスクリプトから補完"
    )
    enrich_parser.add_argument(
        "--config", type=Path, default=None,
        help="config.yamlのパス（省略時は .kai-history/config.yaml を探索）"
    )
    enrich_parser.add_argument(
        "--sessions-dir", type=Path, default=None,
        help="セッションディレクトリ"
    )
    enrich_parser.add_argument(
        "--transcript-dir", type=Path, default=None,
        help="トランスクリプト(.jsonl)ディレクトリ"
    )
    enrich_parser.add_argument(
        "--dry-run", action="store_true",
        help="実行内容を表示するのみ（実際には変更しない）"
    )

    # identity サブコマンド
    subparsers.add_parser(
        "identity",
        help="解決済みのアイデンティティ・プリンシパルを表示"
    )

    args = parser.parse_args(argv)

    if args.version:
        from shared.version import __version__
        print(f"kai-history v{__version__}")
        return 0

    if args.command == "enrich-backfill":
        from application.enrich_backfill import EnrichBackfillCommand
        from infrastructure.config.history_config import load_history_config
        config = load_history_config(args.config)
        if args.sessions_dir:
            config.sessions_dir = args.sessions_dir.expanduser()
        if args.transcript_dir:
            config.transcript_dir = args.transcript_dir.expanduser()
        _setup_logging(config.log_file, args.debug)
        cmd = EnrichBackfillCommand(
            config=config,
            dry_run=args.dry_run
        )
        return cmd.execute()

    if args.command == "identity":
        from infrastructure.settings.settings_resolver import get_settings_resolver
        resolver = get_settings_resolver()
        output = {
            "identity": asdict(resolver.get_identity()),
            "principal": asdict(resolver.get_principal()),
        }
        print(json.dumps(output, ensure_ascii=False, indent=2))
        return 0

    # コマンド未指定時はヘルプ表示
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
