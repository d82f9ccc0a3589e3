"""
インフラストラクチャ層

集計結果のファイル出力など、外部システム依存を提供します。
"""

from .summary_writer import SummaryWriter

__all__ = ["SummaryWriter"]
