"""
増体計算ロジック

個体ごとの計量レコードから日付順の計量イベント列を組み立て、
連続する計量間の日増体と個体サマリーを計算します。
"""

import logging
from typing import List, Optional, Sequence, Union

from .date_normalizer import DateNormalizer
from .field_resolver import FieldResolver, LogicalField
from .models import AnimalSeries, GainSummary, RawRecord, WeighingEvent


SECONDS_PER_DAY = 86400


class GainCalculator:
    """
    増体計算クラス

    Responsibilities:
    - 日付・体重の解釈と無効レコードの除外
    - 日付昇順の安定ソート
    - 連続する計量間の日増体の計算
    - 個体サマリー (GainSummary) の生成

    条件を満たさないレコード・計量ペア・個体は除外するだけで、例外はスローしません。
    """

    MIN_EVENTS = 2
    DECIMAL_PLACES = 4

    def __init__(self):
        """GainCalculator を初期化"""
        self.logger = logging.getLogger(__name__)

    def calculate(self, animal: str, records: Sequence[RawRecord]) -> Optional[GainSummary]:
        """
        個体のレコードから増体サマリーを計算

        Args:
            animal: 個体識別子 (グループキー)
            records: キー正規化済みのレコード (入力順)

        Returns:
            Optional[GainSummary]: サマリー、条件を満たさない場合は None
        """
        series = self.build_series(animal, records)
        if series is None:
            return None
        return self.summarize(series)

    def build_series(self, animal: str, records: Sequence[RawRecord]) -> Optional[AnimalSeries]:
        """
        有効なレコードを日付昇順に並べた計量イベント列を生成

        Args:
            animal: 個体識別子
            records: キー正規化済みのレコード

        Returns:
            Optional[AnimalSeries]: イベント列、有効なレコードが2件未満の場合は None
        """
        if len(records) < self.MIN_EVENTS:
            self.logger.debug(
                f"Skipping animal with too few records: {animal}",
                extra={"animal": animal, "record_count": len(records)}
            )
            return None

        events = []
        for record in records:
            event = self._to_event(animal, record)
            if event is not None:
                events.append(event)

        if len(events) < self.MIN_EVENTS:
            self.logger.debug(
                f"Skipping animal with too few valid records: {animal}",
                extra={
                    "animal": animal,
                    "record_count": len(records),
                    "valid_count": len(events)
                }
            )
            return None

        # sorted は安定ソート (同一日時は入力順を保持)
        events = sorted(events, key=lambda event: event.weighed_at)
        return AnimalSeries(animal=animal, events=events)

    def gain_rates(self, series: AnimalSeries) -> List[float]:
        """
        連続する計量間の日増体を計算

        Args:
            series: 日付昇順の計量イベント列

        Returns:
            List[float]: 日増体のリスト

        Note:
            経過日数が 0 以下のペアはスキップするため、
            要素数は (イベント数 - 1) より少なくなる場合がある
        """
        rates = []
        for previous, current in zip(series.events, series.events[1:]):
            elapsed_days = self._elapsed_days(previous, current)
            if elapsed_days <= 0:
                continue
            rates.append((current.weight - previous.weight) / elapsed_days)
        return rates

    def summarize(self, series: AnimalSeries) -> Optional[GainSummary]:
        """
        計量イベント列から増体サマリーを生成

        Args:
            series: 日付昇順の計量イベント列

        Returns:
            Optional[GainSummary]: サマリー、日増体を1件も計算できない場合は None
        """
        rates = self.gain_rates(series)
        if not rates:
            self.logger.debug(
                f"Skipping animal without positive elapsed time: {series.animal}",
                extra={"animal": series.animal, "valid_count": len(series.events)}
            )
            return None

        first = series.events[0]
        last = series.events[-1]

        return GainSummary(
            animal=series.animal,
            location=FieldResolver.resolve_text(last.record, LogicalField.LOCATION),
            sex=FieldResolver.resolve_text(last.record, LogicalField.SEX).upper(),
            age_months=self._to_age(
                FieldResolver.resolve_number(last.record, LogicalField.AGE_MONTHS)
            ),
            peso_inicial=first.weight,
            peso_final=last.weight,
            ganho_total=last.weight - first.weight,
            periodo_dias=self._elapsed_days(first, last),
            total_pesagens=len(series.events),
            ganho_diario=round(sum(rates) / len(rates), self.DECIMAL_PLACES)
        )

    def _to_event(self, animal: str, record: RawRecord) -> Optional[WeighingEvent]:
        """
        レコードを計量イベントに変換

        Returns:
            Optional[WeighingEvent]: イベント、日付または体重が無効な場合は None
        """
        weighed_at = DateNormalizer.normalize(
            FieldResolver.resolve_field(record, LogicalField.WEIGH_DATE)
        )
        if weighed_at is None:
            return None

        weight = FieldResolver.resolve_number(record, LogicalField.WEIGHT)
        if weight is None:
            return None

        return WeighingEvent(
            animal=animal,
            weighed_at=weighed_at,
            weight=weight,
            record=dict(record)
        )

    @staticmethod
    def _elapsed_days(start: WeighingEvent, end: WeighingEvent) -> float:
        """2つのイベント間の経過日数"""
        return (end.weighed_at - start.weighed_at).total_seconds() / SECONDS_PER_DAY

    @staticmethod
    def _to_age(age: Optional[float]) -> Union[int, float]:
        """月齢を整数値なら int に変換"""
        if age is None:
            return 0
        return int(age) if age.is_integer() else age
