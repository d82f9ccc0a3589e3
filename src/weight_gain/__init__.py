"""
weight_gain

計量記録から個体ごとの平均日増体を集計します。
"""

__version__ = "0.1.0"
