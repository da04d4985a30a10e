# -*- coding: utf-8 -*-
"""
订单管理页
"""

import pandas as pd

from ..core.models import OrderStatus, SortOrder
from ..core.queries import NEXT_STATUS

STATUS_LABELS = {'all': '全部', 'new': '新订单', 'pending': '待处理', 'shipped': '已发货'}


def orders_to_frame(orders) -> pd.DataFrame:
    """订单列表转为表格"""
    frame = pd.DataFrame(
        [
            {'订单号': o.id, '客户': o.customer, '金额': o.amount,
             '状态': STATUS_LABELS[o.status.value], '下单时间': o.date}
            for o in orders
        ],
        columns=['订单号', '客户', '金额', '状态', '下单时间'],
    )
    return frame


def display_orders_tab(st_obj, session_state, store):
    st_obj.subheader("订单管理")

    col_search, col_status, col_sort = st_obj.columns([3, 1, 1])
    col_search.text_input("搜索订单", key='orders_search_text', placeholder="客户或订单号")
    col_status.selectbox(
        "状态", ['all'] + [s.value for s in OrderStatus],
        format_func=STATUS_LABELS.get, key='orders_status_filter',
    )
    col_sort.selectbox(
        "排序", [s.value for s in SortOrder],
        format_func={'newest': '最新优先', 'oldest': '最早优先'}.get, key='orders_sort',
    )

    orders = store.list_orders(
        session_state['orders_status_filter'],
        session_state['orders_search_text'],
        session_state['orders_sort'],
    )
    if not orders:
        st_obj.info("没有符合条件的订单。点击概览页的指标卡片可创建演示订单。")
        return

    st_obj.dataframe(orders_to_frame(orders), use_container_width=True, hide_index=True)

    selected = st_obj.selectbox(
        "选择订单", [o.id for o in orders],
        format_func=lambda order_id: f"{order_id} ({store.find_order(order_id).customer})",
        key='orders_selected_id',
    )
    order = store.find_order(selected)
    if order is None:
        return

    col_advance, col_remove = st_obj.columns(2)
    next_status = NEXT_STATUS[order.status]
    if col_advance.button(f"推进到 {STATUS_LABELS[next_status.value]}", key="orders_advance"):
        store.advance_order(order.id)
        st_obj.rerun()
    if col_remove.button("删除订单", key="orders_remove"):
        store.remove_order(order.id, order.status)
        st_obj.rerun()
