"""
ドメイン層

列名解決・日付正規化・個体別グルーピング・増体計算ロジックを提供します。
"""

from .models import RawRecord, WeighingEvent, AnimalSeries, GainSummary
from .field_resolver import FieldResolver, LogicalField
from .date_normalizer import DateNormalizer
from .record_grouper import RecordGrouper
from .gain_calculator import GainCalculator

__all__ = [
    "RawRecord",
    "WeighingEvent",
    "AnimalSeries",
    "GainSummary",
    "FieldResolver",
    "LogicalField",
    "DateNormalizer",
    "RecordGrouper",
    "GainCalculator",
]
