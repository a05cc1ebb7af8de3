"""SettingsResolver - settings.jsonからアイデンティティ・プリンシパルを解決"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from domain.models.records import Identity, Principal
from shared.constants import DEFAULT_SETTINGS_PATH

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY = Identity(
    name="PAI",
    full_name="Personal AI",
    display_name="PAI",
    voice_id="",
    color="#3B82F6",
)

DEFAULT_PRINCIPAL = Principal(
    name="User",
    pronunciation="",
    timezone="UTC",
)


def _section(settings: Dict[str, Any], key: str) -> Dict[str, Any]:
    """辞書型のセクションのみ返す（それ以外は空dict）"""
    value = settings.get(key)
    return value if isinstance(value, dict) else {}


def _first_str(*values: Any) -> Optional[str]:
    """空でない最初の文字列"""
    for value in values:
        if isinstance(value, str) and value:
            return value
    return None


def _first_dict(*values: Any) -> Optional[Dict[str, Any]]:
    for value in values:
        if isinstance(value, dict):
            return value
    return None


class SettingsResolver:
    """settings.jsonの読み込みと解決。

    読み込み結果はインスタンス内にキャッシュし、clear_cache()まで再読込しない。
    """

    def __init__(self, settings_path: Optional[Path] = None):
        """初期化

        Args:
            settings_path: settings.jsonのパス（デフォルト: ~/.claude/settings.json）
        """
        self.settings_path = Path(settings_path) if settings_path else Path(os.path.expanduser(DEFAULT_SETTINGS_PATH))
        self._settings: Optional[Dict[str, Any]] = None

    def load_settings(self) -> Dict[str, Any]:
        """settings.jsonを読み込む（初回のみ）

        ファイル不在・読み込み失敗・JSON不正は空dictとして扱う。
        """
        if self._settings is not None:
            return self._settings

        settings: Dict[str, Any] = {}
        if self.settings_path.exists():
            try:
                data = json.loads(self.settings_path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    settings = data
                else:
                    logger.warning(f"settings.jsonがオブジェクトではありません: {self.settings_path}")
            except (OSError, ValueError) as e:
                logger.warning(f"settings.json読み込み失敗: {e}")
        else:
            logger.debug(f"settings.json不在: {self.settings_path}")

        self._settings = settings
        return settings

    def get_settings(self) -> Dict[str, Any]:
        """読み込み済みの設定全体"""
        return self.load_settings()

    def clear_cache(self) -> None:
        """キャッシュを破棄し次回アクセス時に再読込させる"""
        self._settings = None

    def get_identity(self) -> Identity:
        """アシスタントのアイデンティティを解決

        フィールド単位で identity → daidentity（旧形式）→ env.DA → デフォルト の順に採用。
        """
        settings = self.load_settings()
        current = _section(settings, "identity")
        legacy = _section(settings, "daidentity")
        env = _section(settings, "env")
        voice = _section(settings, "voice")

        section_name = _first_str(current.get("name"), legacy.get("name"))
        env_name = _first_str(env.get("DA"))

        return Identity(
            name=_first_str(section_name, env_name) or DEFAULT_IDENTITY.name,
            full_name=_first_str(
                current.get("fullName"), legacy.get("fullName"), section_name, env_name
            ) or DEFAULT_IDENTITY.full_name,
            display_name=_first_str(
                current.get("displayName"), legacy.get("displayName"), section_name, env_name
            ) or DEFAULT_IDENTITY.display_name,
            voice_id=_first_str(
                current.get("voiceId"), legacy.get("voiceId"), voice.get("voiceId")
            ) or DEFAULT_IDENTITY.voice_id,
            color=_first_str(current.get("color"), legacy.get("color")) or DEFAULT_IDENTITY.color,
            role=_first_str(current.get("role"), legacy.get("role")),
            voice=_first_dict(current.get("voice"), legacy.get("voice")),
            personality=_first_dict(current.get("personality"), legacy.get("personality")),
        )

    def get_principal(self) -> Principal:
        """プリンシパル情報を解決

        フィールド単位で principal → env.PRINCIPAL / env.TIME_ZONE → デフォルト の順に採用。
        """
        settings = self.load_settings()
        principal = _section(settings, "principal")
        env = _section(settings, "env")

        social = _first_dict(principal.get("social"))
        if social is not None:
            social = {k: v for k, v in social.items() if isinstance(v, str) and v}

        return Principal(
            name=_first_str(principal.get("name"), env.get("PRINCIPAL")) or DEFAULT_PRINCIPAL.name,
            pronunciation=_first_str(principal.get("pronunciation")) or DEFAULT_PRINCIPAL.pronunciation,
            timezone=_first_str(principal.get("timezone"), env.get("TIME_ZONE")) or DEFAULT_PRINCIPAL.timezone,
            social=social or None,
        )

    def get_da_name(self) -> str:
        return self.get_identity().name

    def get_principal_name(self) -> str:
        return self.get_principal().name

    def get_voice_id(self) -> str:
        return self.get_identity().voice_id


# プロセス内で共有するデフォルトインスタンス（初回アクセス時に生成）
_default_resolver: Optional[SettingsResolver] = None


def get_settings_resolver() -> SettingsResolver:
    """デフォルトのSettingsResolverを取得"""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = SettingsResolver()
    return _default_resolver


def get_identity() -> Identity:
    return get_settings_resolver().get_identity()


def get_principal() -> Principal:
    return get_settings_resolver().get_principal()


def clear_settings_cache() -> None:
    """デフォルトインスタンスを破棄（テスト用）"""
    global _default_resolver
    _default_resolver = None
