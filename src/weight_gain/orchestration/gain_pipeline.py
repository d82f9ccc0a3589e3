"""増体集計パイプライン"""

import logging
from typing import List, Optional, Sequence

from ..domain.field_resolver import FieldResolver
from ..domain.gain_calculator import GainCalculator
from ..domain.models import GainSummary, RawRecord
from ..domain.record_grouper import RecordGrouper


class EmptyInputError(Exception):
    """
    入力レコードなし例外

    レコードが1件も渡されなかった場合を表します。集計全体を中止します。
    """


class GainPipeline:
    """
    レコード列から個体ごとの増体サマリー列を計算

    キー正規化 → 個体別グルーピング → 個体ごとの増体計算 → サマリー収集
    の順に処理します。実行間で状態を持たず、同じ入力には同じ結果を返します。
    """

    def __init__(self, calculator: Optional[GainCalculator] = None):
        """
        GainPipeline を初期化

        Args:
            calculator: 増体計算サービス。None の場合は既定の GainCalculator を使用。
        """
        self.calculator = calculator or GainCalculator()
        self.logger = logging.getLogger(__name__)

    def run(self, records: Optional[Sequence[RawRecord]]) -> List[GainSummary]:
        """
        増体サマリーを計算

        Args:
            records: 読み込み直後のレコード列

        Returns:
            List[GainSummary]: 個体の初出順に並んだサマリー

        Raises:
            EmptyInputError: レコードが1件もない場合
        """
        if not records:
            raise EmptyInputError("No records supplied")

        normalized = [FieldResolver.normalize_keys(record) for record in records]
        groups = RecordGrouper.group(normalized)

        summaries = []
        for animal, animal_records in groups.items():
            summary = self.calculator.calculate(animal, animal_records)
            if summary is not None:
                summaries.append(summary)

        self.logger.info(
            f"Computed {len(summaries)} gain summaries from {len(normalized)} records",
            extra={
                "record_count": len(normalized),
                "animal_count": len(groups),
                "summary_count": len(summaries)
            }
        )
        return summaries
