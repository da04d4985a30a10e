# -*- coding: utf-8 -*-
"""
快照序列化与向后兼容适配器

负责快照与JSON文档之间的转换，并将浏览器端旧版存储（camelCase字段，
无版本或version为0）迁移到当前格式
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..config import StoreDefaults
from .models import (
    DashboardState, Message, Notification, NotificationKind, Order, OrderBook,
    OrderStatus, Revenue, SalesData, SalesSeries, SearchResult, SearchResultType,
)


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    # 浏览器端 toISOString() 以 'Z' 结尾
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


class SnapshotAdapter:
    """快照文档适配器"""

    SCHEMA_VERSION = StoreDefaults.SCHEMA_VERSION

    # 旧键名到新键名的映射
    KEY_MAPPING = {
        # 顶层字段
        'unreadCount': 'unread_count',
        'unreadMessages': 'unread_messages',
        'searchQuery': 'search_query',
        'searchResults': 'search_results',
        'salesData': 'sales',
        # 实体字段
        'isRead': 'is_read',
        'type': 'kind',
    }

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._migration_log: List[str] = []

    # -------- 编码 --------

    def dump(self, state: DashboardState) -> Dict[str, Any]:
        """
        将快照转换为可JSON序列化的文档

        Args:
            state: 状态快照

        Returns:
            Dict[str, Any]: {"version": 1, "state": {...}}
        """
        return {
            'version': self.SCHEMA_VERSION,
            'state': {
                'notifications': [
                    {
                        'id': n.id,
                        'message': n.message,
                        'kind': n.kind.value,
                        'is_read': n.is_read,
                        'timestamp': _format_timestamp(n.timestamp),
                    }
                    for n in state.notifications
                ],
                'unread_count': state.unread_count,
                'messages': [
                    {
                        'id': m.id,
                        'sender': m.sender,
                        'content': m.content,
                        'is_read': m.is_read,
                        'timestamp': _format_timestamp(m.timestamp),
                        'avatar': m.avatar,
                    }
                    for m in state.messages
                ],
                'unread_messages': state.unread_messages,
                'revenue': {
                    'total': state.revenue.total,
                    'change_increase': state.revenue.change_increase,
                    'change_decrease': state.revenue.change_decrease,
                },
                'orders': {
                    status.value: [self._dump_order(o) for o in state.orders.get(status)]
                    for status in OrderStatus
                },
                'search_query': state.search_query,
                'search_results': [
                    {
                        'id': r.id,
                        'type': r.type.value,
                        'title': r.title,
                        'description': r.description,
                        'link': r.link,
                    }
                    for r in state.search_results
                ],
                'sales': {
                    'today': list(state.sales.today),
                    'yesterday': list(state.sales.yesterday),
                    'labels': list(state.sales.labels),
                    'weekly': self._dump_series(state.sales.weekly),
                    'monthly': self._dump_series(state.sales.monthly),
                    'quarterly': self._dump_series(state.sales.quarterly),
                },
            },
        }

    @staticmethod
    def _dump_order(order: Order) -> Dict[str, Any]:
        return {
            'id': order.id,
            'status': order.status.value,
            'amount': order.amount,
            'customer': order.customer,
            'date': _format_timestamp(order.date),
        }

    @staticmethod
    def _dump_series(series: SalesSeries) -> Dict[str, list]:
        return {
            'current': list(series.current),
            'previous': list(series.previous),
            'labels': list(series.labels),
        }

    # -------- 解码 --------

    def load(self, document: Dict[str, Any], fallback: DashboardState) -> DashboardState:
        """
        将文档还原为快照，缺失字段使用fallback中的值

        Args:
            document: dump() 的输出或旧版存储文档
            fallback: 缺失字段的默认来源

        Returns:
            DashboardState: 还原后的快照
        """
        data = self.migrate(document)

        revenue = data.get('revenue')
        sales = data.get('sales')
        orders = data.get('orders')

        return DashboardState(
            notifications=tuple(
                self._load_notification(n) for n in data['notifications']
            ) if 'notifications' in data else fallback.notifications,
            unread_count=int(data.get('unread_count', fallback.unread_count)),
            messages=tuple(
                self._load_message(m) for m in data['messages']
            ) if 'messages' in data else fallback.messages,
            unread_messages=int(data.get('unread_messages', fallback.unread_messages)),
            revenue=Revenue(
                total=revenue.get('total', fallback.revenue.total),
                change_increase=revenue.get('change_increase', fallback.revenue.change_increase),
                change_decrease=revenue.get('change_decrease', fallback.revenue.change_decrease),
            ) if isinstance(revenue, dict) else fallback.revenue,
            orders=self._load_orders(orders) if isinstance(orders, dict) else fallback.orders,
            search_query=str(data.get('search_query', fallback.search_query)),
            search_results=tuple(
                self._load_search_result(r) for r in data.get('search_results', [])
            ),
            sales=self._load_sales(sales) if isinstance(sales, dict) else fallback.sales,
        )

    def migrate(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        将任意版本的文档迁移为当前版本的state字典

        Raises:
            ValueError: 文档结构无法识别，或版本高于当前支持的版本
        """
        if not isinstance(document, dict) or not isinstance(document.get('state'), dict):
            raise ValueError("snapshot document has no 'state' object")

        version = document.get('version', 0)
        if not isinstance(version, int):
            raise ValueError(f"snapshot version must be an integer, got {version!r}")
        if version > self.SCHEMA_VERSION:
            raise ValueError(
                f"snapshot version {version} is newer than supported version {self.SCHEMA_VERSION}"
            )

        state = dict(document['state'])
        if version == 0:
            state = self._migrate_legacy(state)
            self._migration_log.append(f"Migrated snapshot: v0 -> v{self.SCHEMA_VERSION}")
            self.logger.info(f"Legacy snapshot migrated to schema version {self.SCHEMA_VERSION}")
        return state

    def _migrate_legacy(self, state: Dict[str, Any]) -> Dict[str, Any]:
        migrated = {self.KEY_MAPPING.get(k, k): v for k, v in state.items()}

        for key in ('notifications', 'messages'):
            if isinstance(migrated.get(key), list):
                migrated[key] = [self._rename_fields(item) for item in migrated[key]]

        # totalRevenue + revenueChange 合并为 revenue
        if 'totalRevenue' in migrated or 'revenueChange' in migrated:
            change = migrated.pop('revenueChange', None) or {}
            migrated['revenue'] = {
                'total': migrated.pop('totalRevenue', 0),
                'change_increase': change.get('increase', 0),
                'change_decrease': change.get('decrease', 0),
            }
        return migrated

    def _rename_fields(self, item):
        if not isinstance(item, dict):
            return item
        return {self.KEY_MAPPING.get(k, k): v for k, v in item.items()}

    @staticmethod
    def _load_notification(item: Dict[str, Any]) -> Notification:
        return Notification(
            id=str(item['id']),
            message=str(item['message']),
            kind=NotificationKind(item['kind']),
            is_read=bool(item.get('is_read', False)),
            timestamp=_parse_timestamp(item['timestamp']),
        )

    @staticmethod
    def _load_message(item: Dict[str, Any]) -> Message:
        return Message(
            id=str(item['id']),
            sender=str(item['sender']),
            content=str(item['content']),
            is_read=bool(item.get('is_read', False)),
            timestamp=_parse_timestamp(item['timestamp']),
            avatar=item.get('avatar'),
        )

    @staticmethod
    def _load_orders(orders: Dict[str, Any]) -> OrderBook:
        book = OrderBook()
        for status in OrderStatus:
            partition = tuple(
                Order(
                    id=str(o['id']),
                    status=status,
                    amount=o['amount'],
                    customer=str(o['customer']),
                    date=_parse_timestamp(o['date']),
                )
                for o in orders.get(status.value, [])
            )
            book = book.with_partition(status, partition)
        return book

    @staticmethod
    def _load_search_result(item: Dict[str, Any]) -> SearchResult:
        return SearchResult(
            id=str(item['id']),
            type=SearchResultType(item['type']),
            title=str(item.get('title', '')),
            description=str(item.get('description', '')),
            link=str(item.get('link', '')),
        )

    @staticmethod
    def _load_series(item: Optional[Dict[str, Any]]) -> SalesSeries:
        item = item or {}
        return SalesSeries(
            current=tuple(item.get('current') or ()),
            previous=tuple(item.get('previous') or ()),
            labels=tuple(item.get('labels') or ()),
        )

    def _load_sales(self, sales: Dict[str, Any]) -> SalesData:
        # 已保存的销售数据整体替换默认值，缺失的序列为空
        return SalesData(
            today=tuple(sales.get('today') or ()),
            yesterday=tuple(sales.get('yesterday') or ()),
            labels=tuple(sales.get('labels') or ()),
            weekly=self._load_series(sales.get('weekly')),
            monthly=self._load_series(sales.get('monthly')),
            quarterly=self._load_series(sales.get('quarterly')),
        )

    def get_migration_log(self) -> list:
        """获取迁移日志"""
        return self._migration_log.copy()
