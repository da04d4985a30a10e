# -*- coding: utf-8 -*-
"""
概览页：营收指标卡片与销售对比图
"""

from ..config import UIDefaults
from ..core.models import OrderStatus, TimeRange

# 点击指标卡片时创建的演示订单状态
METRIC_CARDS = [
    ("新订单", OrderStatus.NEW),
    ("待处理", OrderStatus.PENDING),
    ("已发货", OrderStatus.SHIPPED),
]


def display_overview_tab(st_obj, session_state, store):
    state = store.state

    col_revenue, col_up, col_down = st_obj.columns(3)
    col_revenue.metric("总营收", f"${state.revenue.total:,.2f}")
    col_up.metric("最近上涨", f"${state.revenue.change_increase:,.2f}")
    col_down.metric("最近下跌", f"${state.revenue.change_decrease:,.2f}")

    with st_obj.form("revenue_form"):
        new_total = st_obj.number_input(
            "更新总营收", min_value=0.0, value=float(state.revenue.total), step=100.0
        )
        if st_obj.form_submit_button("保存"):
            store.update_revenue(new_total)
            st_obj.rerun()

    st_obj.subheader("订单")
    card_columns = st_obj.columns(len(METRIC_CARDS))
    for column, (label, status) in zip(card_columns, METRIC_CARDS):
        count = len(state.orders.get(status))
        column.metric(label, count)
        # 点击卡片生成一个该状态的演示订单
        if column.button(f"+ {label}", key=f"orders_demo_{status.value}"):
            store.add_order(status)
            st_obj.rerun()

    st_obj.subheader("销售走势")
    range_options = [r.value for r in TimeRange]
    time_range = st_obj.radio(
        "时间范围",
        range_options,
        format_func=lambda value: UIDefaults.TIME_RANGE_LABELS.get(value, value),
        horizontal=True,
        key='sales_time_range',
    )
    frame = store.sales_frame(time_range)
    if frame.empty:
        st_obj.info("暂无销售数据。")
    else:
        st_obj.line_chart(frame)
