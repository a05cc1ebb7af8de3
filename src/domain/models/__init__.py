"""ドメインモデル"""

from domain.models.records import (
    EnrichmentSummary,
    FileEditInvocation,
    Identity,
    Principal,
    ShellInvocation,
    ToolInvocation,
    TranscriptAnalysis,
    UnknownInvocation,
)

__all__ = [
    "EnrichmentSummary",
    "FileEditInvocation",
    "Identity",
    "Principal",
    "ShellInvocation",
    "ToolInvocation",
    "TranscriptAnalysis",
    "UnknownInvocation",
]
