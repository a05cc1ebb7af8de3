"""ドメインサービス"""

from .document_builder import build_enriched_document
from .focus_classifier import classify_focus
from .frontmatter_parser import parse_frontmatter
from .transcript_analyzer import TranscriptAnalyzer, extract_first_user_message, parse_tool_invocation

__all__ = [
    'TranscriptAnalyzer',
    'build_enriched_document',
    'classify_focus',
    'extract_first_user_message',
    'parse_frontmatter',
    'parse_tool_invocation',
]
