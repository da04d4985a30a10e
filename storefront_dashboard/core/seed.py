# -*- coding: utf-8 -*-
"""
首次启动时使用的默认数据
"""

from datetime import datetime, timezone

from .models import (
    DashboardState, Message, OrderBook, Revenue, SalesData, SalesSeries
)


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def _avatar(photo: str) -> str:
    return (
        f"https://images.unsplash.com/{photo}?ixlib=rb-1.2.1"
        "&auto=format&fit=facearea&facepad=2&w=256&h=256&q=80"
    )


SEED_MESSAGES = (
    Message('1', 'John Smith', 'Your order #4721 has been shipped', False,
            _ts('2024-01-20T11:43:36'), _avatar('photo-1472099645785-5658abf4ff4e')),
    Message('2', 'Sarah Johnson', 'New product inquiry for Electronics category', False,
            _ts('2024-01-20T11:43:34'), _avatar('photo-1494790108377-be9c29b29330')),
    Message('3', 'Mike Wilson', 'Customer support request #89123', False,
            _ts('2024-01-20T11:43:33'), _avatar('photo-1519244703995-f4e0f30006d5')),
    Message('4', 'Emily Davis', 'Inventory update required for SKU-789', False,
            _ts('2024-01-20T11:43:32'), _avatar('photo-1438761681033-6461ffad8d80')),
    Message('5', 'Alex Brown', 'Payment confirmation for order #5832', False,
            _ts('2024-01-20T11:43:32'), _avatar('photo-1500648767791-00dcc994a43e')),
    Message('6', 'Lisa Anderson', 'New feature request from client', False,
            _ts('2024-01-20T11:43:31'), _avatar('photo-1534528741775-53994a69daeb')),
    Message('7', 'David Miller', 'Weekly sales report available', False,
            _ts('2024-01-20T11:43:30'), _avatar('photo-1507003211169-0a1dd7228f2d')),
)

SEED_REVENUE = Revenue(total=45365.00, change_increase=1294, change_decrease=1294)

SEED_SALES = SalesData(
    # 按小时
    today=(20, 5, -15, 25, -5),
    yesterday=(15, 45, 65, 15, 50),
    labels=('9AM', '12PM', '3PM', '6PM', '9PM'),
    # 按天
    weekly=SalesSeries(
        current=(32500, 36800, 42100, 38900, 45200, 35600, 31200),
        previous=(30200, 34500, 39800, 36500, 42900, 33200, 29800),
        labels=('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun'),
    ),
    # 按周
    monthly=SalesSeries(
        current=(245000, 268000, 292000, 315000),
        previous=(235000, 255000, 278000, 298000),
        labels=('Week 1', 'Week 2', 'Week 3', 'Week 4'),
    ),
    # 按月
    quarterly=SalesSeries(
        current=(980000, 1050000, 1150000, 1080000, 1180000, 1250000,
                 1320000, 1280000, 1420000, 1380000, 1450000, 1520000),
        previous=(920000, 980000, 1080000, 1020000, 1120000, 1180000,
                  1250000, 1220000, 1350000, 1320000, 1380000, 1450000),
        labels=('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'),
    ),
)


def default_state() -> DashboardState:
    """返回默认初始状态"""
    return DashboardState(
        notifications=(),
        unread_count=0,
        messages=SEED_MESSAGES,
        unread_messages=len(SEED_MESSAGES),
        revenue=SEED_REVENUE,
        orders=OrderBook(),
        search_query='',
        search_results=(),
        sales=SEED_SALES,
    )
