# 后台页面模块
# 导出各页面的显示函数

from .overview_tab import display_overview_tab
from .inbox_tab import display_inbox_tab
from .orders_tab import display_orders_tab, orders_to_frame

__all__ = [
    'display_overview_tab',
    'display_inbox_tab',
    'display_orders_tab',
    'orders_to_frame',
]
