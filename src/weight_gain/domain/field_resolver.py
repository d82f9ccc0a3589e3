"""
列名解決ロジック

列名の表記ゆれ (大文字小文字・綴り違い) があるレコードから、論理フィールドの値を取り出します。
"""

import math
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple


class LogicalField(str, Enum):
    """論理フィールド"""
    ANIMAL = "animal"
    WEIGHT = "weight"
    WEIGH_DATE = "weigh_date"
    SEX = "sex"
    LOCATION = "location"
    AGE_MONTHS = "age_months"


# 優先順位順の列名候補 (キーは正規化済みの大文字)
FIELD_ALIASES: Dict[LogicalField, Tuple[str, ...]] = {
    LogicalField.ANIMAL: ("ANIMAL", "NOME", "BRINCO", "IDENTIFICACAO", "ID", "NAME"),
    LogicalField.WEIGHT: ("PESO", "PESO_KG", "PESO (KG)", "WEIGHT", "WEIGHT_KG"),
    LogicalField.WEIGH_DATE: (
        "DATA", "DATA_PESAGEM", "DATA PESAGEM", "DATE", "WEIGH_DATE", "WEIGHING_DATE"
    ),
    LogicalField.SEX: ("SEXO", "SEX"),
    LogicalField.LOCATION: ("LOCAL", "LOCALIZACAO", "LOTE", "PASTO", "LOCATION"),
    LogicalField.AGE_MONTHS: ("IDADE", "IDADE_MESES", "IDADE (MESES)", "AGE", "AGE_MONTHS"),
}

# 必須フィールド (animal, weight, weigh_date) はデフォルトなし
FIELD_DEFAULTS: Dict[LogicalField, Any] = {
    LogicalField.SEX: "N/A",
    LogicalField.LOCATION: "N/A",
    LogicalField.AGE_MONTHS: 0,
}


class FieldResolver:
    """
    列名解決クラス

    論理フィールドごとの列名候補を優先順位順に探索し、最初に見つかった列の値を返します。
    候補の値をマージすることはありません。
    """

    @staticmethod
    def normalize_keys(record: Mapping[Any, Any]) -> Dict[str, Any]:
        """
        レコードのキーを前後空白除去 + 大文字に正規化

        Args:
            record: 読み込み直後のレコード

        Returns:
            Dict[str, Any]: キー正規化済みの新しい辞書 (元のレコードは変更しない)

        Note:
            - None キー (CSV のはみ出しセル) は除外
            - 正規化後にキーが衝突した場合は最初の列を採用
        """
        normalized: Dict[str, Any] = {}
        for key, value in record.items():
            if key is None:
                continue
            canonical = str(key).strip().upper()
            if canonical not in normalized:
                normalized[canonical] = value
        return normalized

    @staticmethod
    def resolve(
        record: Mapping[str, Any],
        aliases: Sequence[str],
        default: Any = None
    ) -> Any:
        """
        列名候補を優先順位順に探索して値を取得

        Args:
            record: キー正規化済みのレコード
            aliases: 優先順位順の列名候補
            default: 該当列がない、または値が空の場合の既定値

        Returns:
            Any: 最初に見つかった列の値

        Note:
            最初に見つかった列の値が空 (None・空白文字列) の場合は、
            後続の候補を見ずに default を返す
        """
        for alias in aliases:
            if alias in record:
                value = record[alias]
                if value is None or (isinstance(value, str) and not value.strip()):
                    return default
                return value
        return default

    @staticmethod
    def resolve_field(record: Mapping[str, Any], field: LogicalField) -> Any:
        """論理フィールドの値を既定値付きで取得"""
        return FieldResolver.resolve(
            record, FIELD_ALIASES[field], FIELD_DEFAULTS.get(field)
        )

    @staticmethod
    def to_number(value: Any) -> Optional[float]:
        """
        値を数値 (float) に変換

        対応形式:
        - int / float (bool, NaN, 無限大は除く)
        - 数値文字列 ("120", " 120.5 ")
        - 小数点カンマの数値文字列 ("120,5")

        float に収まらない値やアンダースコア区切り ("1_000") は None

        Args:
            value: 変換前の値

        Returns:
            Optional[float]: 数値、変換できない場合は None
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                return None
        elif isinstance(value, str):
            text = value.strip().replace(" ", "")
            # float() は "1_000" のような区切り文字を受け付けるため除外
            if "_" in text:
                return None
            if "," in text and "." not in text:
                text = text.replace(",", ".")
            try:
                number = float(text)
            except ValueError:
                return None
        else:
            return None

        if math.isnan(number) or math.isinf(number):
            return None
        return number

    @staticmethod
    def resolve_number(record: Mapping[str, Any], field: LogicalField) -> Optional[float]:
        """
        論理フィールドを数値として取得

        Returns:
            Optional[float]: 数値、欠損または数値でない場合は既定値 (既定値がなければ None)
        """
        number = FieldResolver.to_number(FieldResolver.resolve_field(record, field))
        if number is None:
            default = FIELD_DEFAULTS.get(field)
            return float(default) if default is not None else None
        return number

    @staticmethod
    def resolve_text(record: Mapping[str, Any], field: LogicalField) -> str:
        """論理フィールドを前後空白除去済みの文字列として取得"""
        value = FieldResolver.resolve_field(record, field)
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            # スプレッドシートの数値セル (101.0) は整数表記にそろえる
            return str(int(value))
        return str(value).strip()
