# -*- coding: utf-8 -*-
"""
只读投影：过滤与排序

所有函数都是纯函数，不修改传入的集合
"""

from typing import Iterable, List, Sequence, TypeVar, Union

from .models import Order, OrderStatus, ReadFilter, SortOrder

T = TypeVar('T')

# 订单页面"推进状态"按钮对应的下一状态
NEXT_STATUS = {
    OrderStatus.NEW: OrderStatus.PENDING,
    OrderStatus.PENDING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.SHIPPED,
}


def filter_by_read(items: Iterable[T], mode: Union[ReadFilter, str]) -> List[T]:
    """按已读状态过滤通知或消息"""
    mode = ReadFilter(mode)
    if mode is ReadFilter.UNREAD:
        return [item for item in items if not item.is_read]
    if mode is ReadFilter.READ:
        return [item for item in items if item.is_read]
    return list(items)


def sort_by_time(items: Iterable[T], order: Union[SortOrder, str], attr: str = 'timestamp') -> List[T]:
    """
    按时间字段排序，时间相同的条目保持原有相对顺序

    Args:
        items: 待排序条目
        order: newest 或 oldest
        attr: 时间字段名

    Returns:
        List: 排序后的新列表
    """
    order = SortOrder(order)
    # sorted在reverse=True时仍然保持相等元素的原始顺序
    return sorted(items, key=lambda item: getattr(item, attr), reverse=order is SortOrder.NEWEST)


def filter_orders(
    orders: Sequence[Order],
    status_filter: Union[OrderStatus, str] = 'all',
    query: str = '',
    order: Union[SortOrder, str] = SortOrder.NEWEST,
) -> List[Order]:
    """
    订单列表：按状态过滤、按客户名或订单号搜索（不区分大小写）、按下单时间排序

    Args:
        orders: 全部订单
        status_filter: 'all' 或订单状态
        query: 搜索文本，为空时不过滤
        order: 排序方向

    Returns:
        List[Order]: 结果列表
    """
    if status_filter != 'all':
        status = OrderStatus(status_filter)
        orders = [o for o in orders if o.status is status]

    if query:
        needle = query.lower()
        orders = [o for o in orders if needle in o.customer.lower() or needle in o.id.lower()]

    return sort_by_time(orders, order, attr='date')
