"""
日付正規化ロジック

文字列・数値・スプレッドシートのセル値など、形式の異なる日付表現を
比較可能な datetime (タイムゾーンなし、日付のみの場合は 0 時) に変換します。
"""

import re
from typing import Any, Optional
from datetime import date, datetime, timedelta

from dateutil import parser as dt_parser


class DateNormalizer:
    """
    日付正規化クラス

    解釈できない日付は通常の結果として None を返します (例外をスローしない)。
    """

    # スプレッドシートのシリアル値の起点 (シリアル値 1 = 1900-01-01)
    SERIAL_EPOCH = datetime(1900, 1, 1)
    # 1900年2月29日 (存在しない日) の計上と起点合わせの 1 日分
    SERIAL_OFFSET_DAYS = 2
    # 汎用パースで欠けている年・月・日を補う値 (実行日に依存させない)
    GENERIC_DEFAULT = datetime(1900, 1, 1)

    _SERIAL_PATTERN = re.compile(r'^\d+(\.\d+)?$')
    _DAY_MONTH_YEAR_PATTERN = re.compile(r'^(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})$')

    @staticmethod
    def normalize(value: Any) -> Optional[datetime]:
        """
        日付表現を datetime に変換

        対応形式 (上から順に試行し、最初に成功したものを採用):
        - datetime / date オブジェクト → そのまま (date は 0 時)
        - 5文字以上の数値 → スプレッドシートのシリアル値
        - "D/M/YYYY", "DD-MM-YY" など → 日/月/年 (2桁年は 2000 + YY)
        - その他 → 汎用の日付パース (dateutil)

        Args:
            value: 正規化前の日付

        Returns:
            Optional[datetime]: 正規化済みの日時、解釈できない場合は None
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, datetime):
            return value.replace(tzinfo=None)

        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)

        date_str = str(value).strip()
        if not date_str:
            return None

        if len(date_str) > 4 and DateNormalizer._SERIAL_PATTERN.match(date_str):
            return DateNormalizer._from_serial(date_str)

        match = DateNormalizer._DAY_MONTH_YEAR_PATTERN.match(date_str)
        if match:
            return DateNormalizer._from_day_month_year(
                match.group(1), match.group(2), match.group(3)
            )

        return DateNormalizer._parse_generic(date_str)

    @staticmethod
    def _from_serial(serial_str: str) -> Optional[datetime]:
        """
        スプレッドシートのシリアル値を変換

        起点 1900-01-01 に (シリアル値 - 2) 日を加算します。
        時刻部分 (小数部) は切り捨てます。

        Args:
            serial_str: 数値文字列 ("44927", "44927.0")

        Returns:
            Optional[datetime]: 変換結果、範囲外の場合は None
        """
        try:
            serial = int(float(serial_str))
            return DateNormalizer.SERIAL_EPOCH + timedelta(
                days=serial - DateNormalizer.SERIAL_OFFSET_DAYS
            )
        except (OverflowError, ValueError):
            return None

    @staticmethod
    def _from_day_month_year(day: str, month: str, year: str) -> Optional[datetime]:
        """
        日/月/年の各要素から datetime を生成

        Args:
            day: 日 (1-2桁)
            month: 月 (1-2桁)
            year: 年 (2-4桁、2桁の場合は 2000 + YY)

        Returns:
            Optional[datetime]: 生成結果、存在しない日付の場合は None
        """
        year_num = int(year)
        if len(year) == 2:
            year_num += 2000

        try:
            return datetime(year_num, int(month), int(day))
        except ValueError:
            return None

    @staticmethod
    def _parse_generic(date_str: str) -> Optional[datetime]:
        """汎用の日付パース (欠けている要素は GENERIC_DEFAULT で補完、タイムゾーン情報は破棄)"""
        try:
            parsed = dt_parser.parse(date_str, default=DateNormalizer.GENERIC_DEFAULT)
        except (ValueError, OverflowError):
            return None
        return parsed.replace(tzinfo=None)
