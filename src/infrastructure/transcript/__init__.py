"""トランスクリプト読み込み"""

from infrastructure.transcript.transcript_reader import TranscriptReader, iter_records, parse_record

__all__ = [
    "TranscriptReader",
    "iter_records",
    "parse_record",
]
