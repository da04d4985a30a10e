# -*- coding: utf-8 -*-
"""
后台核心状态管理模块

提供状态快照、订单/通知/消息操作以及快照持久化
"""

from .dashboard_store import DashboardStore
from .state_keys import StateKeys
from .compat import SnapshotAdapter
from .session import get_session_store

__version__ = "1.0.0"
__all__ = ["DashboardStore", "StateKeys", "SnapshotAdapter", "get_session_store"]
