# -*- coding: utf-8 -*-
"""
销售图表数据的时间范围选择
"""

import logging
from typing import Union

import pandas as pd

from .models import SalesData, SalesSeries, TimeRange

logger = logging.getLogger(__name__)


def series_for_range(sales: SalesData, time_range: Union[TimeRange, str]) -> SalesSeries:
    """
    根据时间范围返回对应的对比序列

    24h -> 今日/昨日按小时, 7d -> 按天, 30d -> 按周, 90d -> 按月
    """
    time_range = TimeRange(time_range)
    if time_range is TimeRange.DAY:
        return SalesSeries(current=sales.today, previous=sales.yesterday, labels=sales.labels)
    if time_range is TimeRange.WEEK:
        return sales.weekly
    if time_range is TimeRange.MONTH:
        return sales.monthly
    return sales.quarterly


def check_series_lengths(series: SalesSeries, name: str = '') -> bool:
    """检查标签与数值序列长度是否一致，不一致时记录警告"""
    n_labels = len(series.labels)
    ok = len(series.current) == n_labels and len(series.previous) == n_labels
    if not ok:
        logger.warning(
            f"Sales series {name or '<unnamed>'} has mismatched lengths: "
            f"current={len(series.current)}, previous={len(series.previous)}, labels={n_labels}"
        )
    return ok


def series_to_frame(series: SalesSeries) -> pd.DataFrame:
    """
    将序列转换为以标签为索引、包含 current/previous 两列的DataFrame

    长度不一致时按最长的序列对齐，缺失处为NaN
    """
    length = max(len(series.labels), len(series.current), len(series.previous))
    if length == 0:
        return pd.DataFrame(columns=['current', 'previous'], dtype=float)

    def pad(values):
        values = list(values)
        return values + [float('nan')] * (length - len(values))

    labels = list(series.labels) + [f"#{i + 1}" for i in range(len(series.labels), length)]
    frame = pd.DataFrame(
        {'current': pad(series.current), 'previous': pad(series.previous)},
        index=pd.Index(labels, name='label'),
        dtype=float,
    )
    return frame
