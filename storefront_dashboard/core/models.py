# -*- coding: utf-8 -*-
"""
后台状态数据模型

所有实体均为不可变数据类，集合字段使用tuple，
状态变更通过 dataclasses.replace 生成新的快照
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class NotificationKind(str, Enum):
    """通知类型"""
    MESSAGE = 'message'
    ALERT = 'alert'


class OrderStatus(str, Enum):
    """订单状态"""
    NEW = 'new'
    PENDING = 'pending'
    SHIPPED = 'shipped'


class ReadFilter(str, Enum):
    """已读/未读过滤方式"""
    ALL = 'all'
    UNREAD = 'unread'
    READ = 'read'


class SortOrder(str, Enum):
    """按时间排序方向"""
    NEWEST = 'newest'
    OLDEST = 'oldest'


class TimeRange(str, Enum):
    """销售图表的时间范围"""
    DAY = '24h'
    WEEK = '7d'
    MONTH = '30d'
    QUARTER = '90d'


class SearchResultType(str, Enum):
    ORDER = 'order'
    PRODUCT = 'product'
    CUSTOMER = 'customer'


@dataclass(frozen=True)
class Notification:
    """系统通知"""
    id: str
    message: str
    kind: NotificationKind
    is_read: bool
    timestamp: datetime


@dataclass(frozen=True)
class Message:
    """站内消息，与通知分开存放"""
    id: str
    sender: str
    content: str
    is_read: bool
    timestamp: datetime
    avatar: Optional[str] = None


@dataclass(frozen=True)
class Order:
    """订单"""
    id: str
    status: OrderStatus
    amount: float
    customer: str
    date: datetime

    @property
    def short_id(self) -> str:
        """订单号第一个'-'之前的部分，用于通知文案"""
        return self.id.split('-')[0]


@dataclass(frozen=True)
class Revenue:
    """营收及最近一次上涨/下跌幅度"""
    total: float = 0.0
    change_increase: float = 0.0
    change_decrease: float = 0.0


@dataclass(frozen=True)
class SalesSeries:
    """一组对比序列：本期、上期以及对应标签"""
    current: Tuple[float, ...] = ()
    previous: Tuple[float, ...] = ()
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SalesData:
    """
    销售图表数据

    today/yesterday 为按小时的最细粒度数据，
    weekly/monthly/quarterly 为独立提供的粗粒度数据，不由细粒度数据汇总
    """
    today: Tuple[float, ...] = ()
    yesterday: Tuple[float, ...] = ()
    labels: Tuple[str, ...] = ()
    weekly: SalesSeries = field(default_factory=SalesSeries)
    monthly: SalesSeries = field(default_factory=SalesSeries)
    quarterly: SalesSeries = field(default_factory=SalesSeries)


@dataclass(frozen=True)
class SearchResult:
    id: str
    type: SearchResultType
    title: str
    description: str
    link: str


@dataclass(frozen=True)
class OrderBook:
    """按状态分区的订单集合，三个分区互不相交"""
    new: Tuple[Order, ...] = ()
    pending: Tuple[Order, ...] = ()
    shipped: Tuple[Order, ...] = ()

    def get(self, status: OrderStatus) -> Tuple[Order, ...]:
        return getattr(self, OrderStatus(status).value)

    def with_partition(self, status: OrderStatus, orders: Tuple[Order, ...]) -> 'OrderBook':
        kwargs = {
            'new': self.new,
            'pending': self.pending,
            'shipped': self.shipped,
        }
        kwargs[OrderStatus(status).value] = tuple(orders)
        return OrderBook(**kwargs)

    def all_orders(self) -> Tuple[Order, ...]:
        """按 new, pending, shipped 顺序合并所有订单"""
        return self.new + self.pending + self.shipped

    def find(self, order_id: str) -> Optional[Order]:
        for order in self.all_orders():
            if order.id == order_id:
                return order
        return None


@dataclass(frozen=True)
class DashboardState:
    """后台完整状态快照"""
    notifications: Tuple[Notification, ...] = ()
    unread_count: int = 0
    messages: Tuple[Message, ...] = ()
    unread_messages: int = 0
    revenue: Revenue = field(default_factory=Revenue)
    orders: OrderBook = field(default_factory=OrderBook)
    search_query: str = ''
    search_results: Tuple[SearchResult, ...] = ()
    sales: SalesData = field(default_factory=SalesData)
