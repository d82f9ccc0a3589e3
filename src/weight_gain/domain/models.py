"""
データモデル定義

このモジュールは weight_gain のドメイン層のデータモデルを定義します:
- RawRecord: 読み込み直後の正規化前レコード (列名・型は不定)
- WeighingEvent: 日付と体重が解釈済みの計量イベント
- AnimalSeries: 個体ごとに日付順に並んだ計量イベント列
- GainSummary: 個体ごとの増体サマリー
"""

from typing import Any, Dict, List, Mapping, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


RawRecord = Mapping[str, Any]


class WeighingEvent(BaseModel):
    """
    計量イベント

    日付 (weighed_at) と体重 (weight) が解釈済みのレコードです。
    日付が解釈できない、または体重が数値でないレコードからは生成されません。
    """

    model_config = ConfigDict(frozen=True)

    animal: str = Field(..., description="個体識別子")
    weighed_at: datetime = Field(..., description="計量日 (タイムゾーンなし)")
    weight: float = Field(..., description="体重")
    record: Dict[str, Any] = Field(default_factory=dict, description="キー正規化済みの元レコード")


class AnimalSeries(BaseModel):
    """
    個体ごとの計量イベント列

    events は weighed_at の昇順に並んでいる必要があります。
    同一日時のイベントは入力順を保持し、重複排除はしません。
    """

    model_config = ConfigDict(frozen=True)

    animal: str = Field(..., description="個体識別子")
    events: List[WeighingEvent] = Field(default_factory=list, description="日付昇順の計量イベント")

    @field_validator("events")
    @classmethod
    def validate_chronological(cls, v: List[WeighingEvent]) -> List[WeighingEvent]:
        """
        日付昇順 (非減少) であることのバリデーション

        Raises:
            ValueError: 日付が前のイベントより前に戻っている場合
        """
        for previous, current in zip(v, v[1:]):
            if current.weighed_at < previous.weighed_at:
                raise ValueError(
                    f"計量イベントが日付順ではありません: "
                    f"{previous.weighed_at.isoformat()} > {current.weighed_at.isoformat()}"
                )
        return v


class GainSummary(BaseModel):
    """
    個体ごとの増体サマリー

    有効な計量が2件以上あり、日増体を1件以上計算できた個体についてのみ生成されます。
    location / sex / age_months は日付順で最後の計量レコードから取得します。
    """

    animal: str = Field(..., description="個体識別子")
    location: str = Field(default="N/A", description="最終計量時の場所")
    sex: str = Field(default="N/A", description="性別 (大文字)")
    age_months: Union[int, float] = Field(default=0, description="最終計量時の月齢")
    peso_inicial: float = Field(..., description="初回体重")
    peso_final: float = Field(..., description="最終体重")
    ganho_total: float = Field(..., description="総増体 (最終体重 - 初回体重)")
    periodo_dias: float = Field(..., description="初回から最終計量までの日数")
    total_pesagens: int = Field(..., ge=2, description="有効な計量件数")
    ganho_diario: float = Field(..., description="平均日増体 (小数点以下4桁)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "animal": "BESS",
                "location": "PASTO 3",
                "sex": "F",
                "age_months": 18,
                "peso_inicial": 100.0,
                "peso_final": 120.0,
                "ganho_total": 20.0,
                "periodo_dias": 10.0,
                "total_pesagens": 2,
                "ganho_diario": 2.0
            }
        }
    )
