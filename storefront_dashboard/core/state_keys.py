# -*- coding: utf-8 -*-
"""
统一状态键命名规范

定义Streamlit session_state中各界面模块使用的状态键，确保一致性和避免冲突
"""

from typing import Any, Dict, List, Optional, Set
from dataclasses import dataclass, field

from ..config import StoreConfig, StoreDefaults, UIDefaults


@dataclass
class ModuleStateKeys:
    """模块状态键定义"""
    module_name: str
    keys: List[str]
    defaults: Dict[str, Any] = field(default_factory=dict)


class StateKeys:
    """状态键命名规范管理器"""

    # 命名前缀规范
    PREFIXES = {
        'store': 'store_',
        'inbox': 'inbox_',
        'orders': 'orders_',
        'sales': 'sales_',
        'ui': 'ui_',
    }

    # 导航与全局控件
    UI = ModuleStateKeys(
        module_name='ui',
        keys=['ui_main_module', 'ui_search_box'],
    )

    # 状态存储对象及其持久化快照（快照键为默认存储名称，实际键见 snapshot_key）
    STORE_INSTANCE = 'store_instance'
    STORE_SNAPSHOT = StoreDefaults.STORAGE_NAME

    STORE = ModuleStateKeys(
        module_name='store',
        keys=[STORE_INSTANCE, STORE_SNAPSHOT],
    )

    # 通知和消息面板
    INBOX = ModuleStateKeys(
        module_name='inbox',
        keys=[
            'inbox_notification_filter',
            'inbox_notification_sort',
            'inbox_message_filter',
            'inbox_message_sort',
            'inbox_message_to_mark',
        ],
        defaults={
            'inbox_notification_filter': UIDefaults.NOTIFICATION_FILTER,
            'inbox_notification_sort': UIDefaults.NOTIFICATION_SORT,
            'inbox_message_filter': UIDefaults.MESSAGE_FILTER,
            'inbox_message_sort': UIDefaults.MESSAGE_SORT,
        },
    )

    # 订单页面
    ORDERS = ModuleStateKeys(
        module_name='orders',
        keys=[
            'orders_status_filter',
            'orders_sort',
            'orders_search_text',
            'orders_selected_id',
        ],
        defaults={
            'orders_status_filter': UIDefaults.ORDER_STATUS_FILTER,
            'orders_sort': UIDefaults.ORDER_SORT,
            'orders_search_text': '',
        },
    )

    # 销售图表
    SALES = ModuleStateKeys(
        module_name='sales',
        keys=['sales_time_range'],
        defaults={'sales_time_range': UIDefaults.TIME_RANGE},
    )

    # 所有模块状态键集合
    ALL_MODULES = [UI, STORE, INBOX, ORDERS, SALES]

    @classmethod
    def get_module(cls, module_name: str):
        for module in cls.ALL_MODULES:
            if module.module_name == module_name:
                return module
        return None

    @classmethod
    def get_module_keys(cls, module_name: str) -> List[str]:
        """获取指定模块的所有状态键"""
        module = cls.get_module(module_name)
        return list(module.keys) if module else []

    @classmethod
    def get_all_keys(cls) -> Set[str]:
        """获取所有状态键"""
        all_keys = set()
        for module in cls.ALL_MODULES:
            all_keys.update(module.keys)
        return all_keys

    @classmethod
    def snapshot_key(cls, config: Optional[StoreConfig] = None) -> str:
        """session后端保存快照使用的键，与配置中的存储名称一致"""
        return config.storage_name if config is not None else cls.STORE_SNAPSHOT

    @classmethod
    def validate_key_name(cls, key: str, config: Optional[StoreConfig] = None) -> bool:
        """
        验证状态键命名是否符合规范

        Args:
            key: 状态键
            config: 当前运行时配置，用于识别快照键，默认按默认存储名称判断
        """
        if not key:
            return False

        for prefix in cls.PREFIXES.values():
            if key.startswith(prefix):
                return True

        # 持久化快照沿用存储名称
        return key == cls.snapshot_key(config)

    @classmethod
    def suggest_key_name(cls, module_name: str, key_description: str) -> str:
        """根据模块名和描述建议状态键名称"""
        prefix = cls.PREFIXES.get(module_name, f"{module_name}_")
        clean_desc = key_description.lower().replace(' ', '_').replace('-', '_')
        return f"{prefix}{clean_desc}"

    @classmethod
    def init_ui_state(cls, session_state) -> int:
        """
        为界面模块写入缺失的默认值

        Args:
            session_state: Streamlit session state或普通dict

        Returns:
            int: 新写入的键数量
        """
        written = 0
        for module in cls.ALL_MODULES:
            for key, value in module.defaults.items():
                if key not in session_state:
                    session_state[key] = value
                    written += 1
        return written
