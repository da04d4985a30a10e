# -*- coding: utf-8 -*-
"""
后台状态存储

集中管理通知、消息、订单、营收、销售图表和搜索词。
每次变更都会生成新的不可变快照，通知订阅者，然后尽力写入持久化存储
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from ..config import StoreConfig
from .compat import SnapshotAdapter
from .generators import OrderDataGenerator, RandomDataGenerator
from .models import (
    DashboardState, Message, Notification, NotificationKind, Order, OrderStatus,
    ReadFilter, Revenue, SalesSeries, SortOrder, TimeRange,
)
from .queries import NEXT_STATUS, filter_by_read, filter_orders, sort_by_time
from .sales import check_series_lengths, series_for_range, series_to_frame
from .seed import default_state
from .storage import MemoryStorage, SnapshotStorage

Listener = Callable[[DashboardState], None]


class DashboardStore:
    """后台状态存储"""

    def __init__(self, config: Optional[StoreConfig] = None,
                 storage: Optional[SnapshotStorage] = None,
                 generator: Optional[OrderDataGenerator] = None,
                 adapter: Optional[SnapshotAdapter] = None):
        """
        初始化状态存储，优先加载已持久化的快照

        Args:
            config: 运行时配置，默认使用 StoreConfig()
            storage: 持久化后端（SnapshotStorage），默认仅保存在内存
            generator: 新订单数据生成器（OrderDataGenerator），默认随机生成
            adapter: 快照序列化适配器
        """
        self.config = config if config is not None else StoreConfig()
        self.storage = storage if storage is not None else MemoryStorage()
        self.generator = generator if generator is not None else RandomDataGenerator()
        self.adapter = adapter if adapter is not None else SnapshotAdapter()
        self.logger = logging.getLogger(__name__)
        self._listeners: List[Listener] = []

        self._state = self._load_initial_state()
        self.logger.info(
            f"DashboardStore initialized: {len(self._state.notifications)} notifications, "
            f"{len(self._state.messages)} messages, {len(self._state.orders.all_orders())} orders"
        )

    def _load_initial_state(self) -> DashboardState:
        """加载快照；不存在或无法解析时使用默认数据"""
        fallback = default_state()
        try:
            document = self.storage.load(self.config.storage_name)
        except Exception as e:
            self.logger.error(f"Failed to load snapshot {self.config.storage_name}: {e}")
            return fallback

        if document is None:
            self.logger.info(f"No snapshot found for {self.config.storage_name}, using defaults")
            return fallback

        try:
            return self.adapter.load(document, fallback)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            self.logger.error(f"Discarding unreadable snapshot {self.config.storage_name}: {e}")
            return fallback

    # -------- 快照与订阅 --------

    @property
    def state(self) -> DashboardState:
        """当前快照"""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        注册变更回调，每次状态替换后以新快照调用

        Args:
            listener: 回调函数

        Returns:
            Callable: 取消订阅函数
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: DashboardState, action: str):
        """替换快照，通知订阅者并持久化"""
        if new_state is self._state:
            return
        self._state = new_state
        self.logger.debug(f"State replaced by {action}")

        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception as e:
                self.logger.error(f"Subscriber failed after {action}: {e}")

        self._persist()

    def _persist(self):
        try:
            self.storage.save(self.config.storage_name, self.adapter.dump(self._state))
        except Exception as e:
            self.logger.error(f"Failed to persist snapshot {self.config.storage_name}: {e}")

    def _decrement_unread(self, count: int) -> int:
        count -= 1
        if self.config.clamp_unread_count:
            count = max(count, 0)
        return count

    # -------- 通知 --------

    def _with_notification(self, state: DashboardState, message: str,
                           kind: NotificationKind) -> Tuple[DashboardState, Notification]:
        notification = Notification(
            id=self.generator.new_id(),
            message=message,
            kind=NotificationKind(kind),
            is_read=False,
            timestamp=self.generator.now(),
        )
        new_state = replace(
            state,
            notifications=(notification,) + state.notifications,
            unread_count=state.unread_count + 1,
        )
        return new_state, notification

    def add_notification(self, message: str,
                         kind: Union[NotificationKind, str] = NotificationKind.MESSAGE) -> Notification:
        """新增未读通知，插入到列表最前"""
        new_state, notification = self._with_notification(self._state, message, NotificationKind(kind))
        self._commit(new_state, 'add_notification')
        return notification

    def mark_notification_as_read(self, notification_id: str):
        """
        标记通知为已读

        未读计数总是减1，即使id不存在或已读；开启 clamp_unread_count 时不低于0
        """
        state = self._state
        notifications = tuple(
            replace(n, is_read=True) if n.id == notification_id else n
            for n in state.notifications
        )
        self._commit(
            replace(state, notifications=notifications,
                    unread_count=self._decrement_unread(state.unread_count)),
            'mark_notification_as_read',
        )

    def clear_notifications(self):
        self._commit(replace(self._state, notifications=(), unread_count=0), 'clear_notifications')

    def filter_notifications(self, mode: Union[ReadFilter, str] = ReadFilter.ALL) -> List[Notification]:
        return filter_by_read(self._state.notifications, mode)

    def sort_notifications(self, order: Union[SortOrder, str] = SortOrder.NEWEST,
                           notifications: Optional[Sequence[Notification]] = None) -> List[Notification]:
        """按时间排序，未指定notifications时对全部通知排序"""
        items = self._state.notifications if notifications is None else notifications
        return sort_by_time(items, order)

    # -------- 消息 --------

    def add_message(self, sender: str, content: str, avatar: Optional[str] = None) -> Message:
        state = self._state
        message = Message(
            id=self.generator.new_id(),
            sender=sender,
            content=content,
            is_read=False,
            timestamp=self.generator.now(),
            avatar=avatar,
        )
        self._commit(
            replace(state, messages=(message,) + state.messages,
                    unread_messages=state.unread_messages + 1),
            'add_message',
        )
        return message

    def mark_message_as_read(self, message_id: str):
        """标记消息为已读，计数规则与通知相同"""
        state = self._state
        messages = tuple(
            replace(m, is_read=True) if m.id == message_id else m
            for m in state.messages
        )
        self._commit(
            replace(state, messages=messages,
                    unread_messages=self._decrement_unread(state.unread_messages)),
            'mark_message_as_read',
        )

    def clear_messages(self):
        self._commit(replace(self._state, messages=(), unread_messages=0), 'clear_messages')

    def filter_messages(self, mode: Union[ReadFilter, str] = ReadFilter.ALL) -> List[Message]:
        return filter_by_read(self._state.messages, mode)

    def sort_messages(self, order: Union[SortOrder, str] = SortOrder.NEWEST,
                      messages: Optional[Sequence[Message]] = None) -> List[Message]:
        items = self._state.messages if messages is None else messages
        return sort_by_time(items, order)

    # -------- 营收 --------

    def update_revenue(self, amount: float):
        """
        更新总营收

        差值为正时替换 change_increase，为负时替换 change_decrease，为0时均不变。
        revenue_swing_mode='max' 时仅在新差值更大时替换
        """
        revenue = self._state.revenue
        diff = amount - revenue.total
        increase = revenue.change_increase
        decrease = revenue.change_decrease
        keep_max = self.config.revenue_swing_mode == 'max'

        if diff > 0 and (not keep_max or diff > increase):
            increase = diff
        elif diff < 0 and (not keep_max or abs(diff) > decrease):
            decrease = abs(diff)

        self._commit(
            replace(self._state, revenue=Revenue(total=amount, change_increase=increase,
                                                 change_decrease=decrease)),
            'update_revenue',
        )

    # -------- 订单 --------

    def add_order(self, status: Union[OrderStatus, str], amount: Optional[float] = None,
                  customer: Optional[str] = None) -> Order:
        """
        新建订单并发送通知

        默认忽略调用方的 amount/customer，改用生成器的演示数据；
        keep_caller_order_fields 开启时使用调用方提供的值

        Returns:
            Order: 新订单

        Raises:
            ValueError: 状态无效，或保留调用方字段时 amount 为负数
        """
        status = OrderStatus(status)
        if self.config.keep_caller_order_fields and amount is not None and amount < 0:
            raise ValueError(f"Order amount must be non-negative, got {amount!r}")
        if not self.config.keep_caller_order_fields or amount is None:
            amount = self.generator.order_amount()
        if not self.config.keep_caller_order_fields or customer is None:
            customer = self.generator.customer_name()

        order = Order(
            id=self.generator.new_id(),
            status=status,
            amount=amount,
            customer=customer,
            date=self.generator.now(),
        )

        state = self._state
        orders = state.orders.with_partition(status, (order,) + state.orders.get(status))
        new_state, _ = self._with_notification(
            replace(state, orders=orders),
            f"New {status.value} order #{order.short_id} from {order.customer}",
            NotificationKind.ALERT,
        )
        self._commit(new_state, 'add_order')
        self.logger.info(f"Order {order.id} created with status {status.value}")
        return order

    def remove_order(self, order_id: str, status: Union[OrderStatus, str]):
        """从指定状态分区删除订单，不存在时不做任何操作"""
        status = OrderStatus(status)
        partition = self._state.orders.get(status)
        remaining = tuple(o for o in partition if o.id != order_id)
        if len(remaining) == len(partition):
            self.logger.debug(f"remove_order: {order_id} not found in {status.value}")
            return
        self._commit(
            replace(self._state, orders=self._state.orders.with_partition(status, remaining)),
            'remove_order',
        )

    def update_order_status(self, order_id: str, new_status: Union[OrderStatus, str]):
        """
        将订单移动到新状态分区的最前面并发送通知

        不校验状态流转；新旧状态相同时同样重新插入。订单不存在时不做任何操作
        """
        new_status = OrderStatus(new_status)
        state = self._state
        order = state.orders.find(order_id)
        if order is None:
            self.logger.debug(f"update_order_status: {order_id} not found")
            return

        old_status = order.status
        orders = state.orders.with_partition(
            old_status, tuple(o for o in state.orders.get(old_status) if o.id != order_id)
        )
        orders = orders.with_partition(
            new_status, (replace(order, status=new_status),) + orders.get(new_status)
        )
        new_state, _ = self._with_notification(
            replace(state, orders=orders),
            f"Order {order_id} moved from {old_status.value} to {new_status.value}",
            NotificationKind.MESSAGE,
        )
        self._commit(new_state, 'update_order_status')

    def advance_order(self, order_id: str) -> Optional[OrderStatus]:
        """
        按 new -> pending -> shipped 推进订单状态

        Returns:
            Optional[OrderStatus]: 推进后的状态，订单不存在时为None
        """
        order = self._state.orders.find(order_id)
        if order is None:
            return None
        next_status = NEXT_STATUS[order.status]
        self.update_order_status(order_id, next_status)
        return next_status

    def find_order(self, order_id: str) -> Optional[Order]:
        return self._state.orders.find(order_id)

    def list_orders(self, status_filter: Union[OrderStatus, str] = 'all', query: str = '',
                    order: Union[SortOrder, str] = SortOrder.NEWEST) -> List[Order]:
        """合并三个分区后按状态、搜索词过滤并按下单时间排序"""
        return filter_orders(self._state.orders.all_orders(), status_filter, query, order)

    # -------- 搜索 --------

    def set_search_query(self, query: str):
        self._commit(replace(self._state, search_query=query), 'set_search_query')

    # -------- 销售图表 --------

    def get_sales_series(self, time_range: Union[TimeRange, str] = TimeRange.DAY) -> SalesSeries:
        return series_for_range(self._state.sales, time_range)

    def sales_frame(self, time_range: Union[TimeRange, str] = TimeRange.DAY) -> pd.DataFrame:
        return series_to_frame(self.get_sales_series(time_range))

    def update_sales_data(self, today: Sequence[float], yesterday: Sequence[float]):
        """替换按小时的今日/昨日数据，其余序列保持不变"""
        sales = replace(self._state.sales, today=tuple(today), yesterday=tuple(yesterday))
        check_series_lengths(series_for_range(sales, TimeRange.DAY), '24h')
        self._commit(replace(self._state, sales=sales), 'update_sales_data')

    # -------- 摘要 --------

    def get_state_summary(self) -> dict:
        """获取状态摘要信息"""
        state = self._state
        return {
            'notifications': len(state.notifications),
            'unread_count': state.unread_count,
            'messages': len(state.messages),
            'unread_messages': state.unread_messages,
            'orders': {status.value: len(state.orders.get(status)) for status in OrderStatus},
            'total_revenue': state.revenue.total,
            'subscribers': len(self._listeners),
        }
