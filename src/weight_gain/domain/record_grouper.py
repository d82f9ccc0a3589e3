"""
個体別グルーピング

レコードを個体識別子 (animal) ごとに分割します。
"""

from typing import Dict, Iterable, List

from .field_resolver import FieldResolver, LogicalField
from .models import RawRecord


class RecordGrouper:
    """
    個体別グルーピングクラス

    グループの順序は各個体の初出順、グループ内の順序は入力順を保持します。
    """

    UNKNOWN_ANIMAL = "UNKNOWN"

    @staticmethod
    def group(records: Iterable[RawRecord]) -> Dict[str, List[RawRecord]]:
        """
        レコードを個体識別子ごとに分割

        Args:
            records: キー正規化済みのレコード列

        Returns:
            Dict[str, List[RawRecord]]: 個体識別子 → レコードリスト

        Note:
            個体識別子が欠損・空のレコードは "UNKNOWN" にまとめる
        """
        groups: Dict[str, List[RawRecord]] = {}
        for record in records:
            animal = FieldResolver.resolve_text(record, LogicalField.ANIMAL)
            key = animal or RecordGrouper.UNKNOWN_ANIMAL
            groups.setdefault(key, []).append(record)
        return groups
