# -*- coding: utf-8 -*-
"""
每个浏览器会话持有一个状态存储实例
"""

import logging
from typing import MutableMapping, Optional

from ..config import StoreConfig, load_config
from .dashboard_store import DashboardStore
from .state_keys import StateKeys
from .storage import create_storage

logger = logging.getLogger(__name__)


def get_session_store(session_state: Optional[MutableMapping] = None,
                      config: Optional[StoreConfig] = None) -> DashboardStore:
    """
    获取当前会话的状态存储，首次调用时创建并写入界面默认状态

    Args:
        session_state: Streamlit session state对象，默认使用st.session_state
        config: 运行时配置，默认从环境变量读取

    Returns:
        DashboardStore: 会话内唯一的状态存储
    """
    if session_state is None:
        import streamlit as st
        session_state = st.session_state

    StateKeys.init_ui_state(session_state)

    store = session_state.get(StateKeys.STORE_INSTANCE)
    if store is None:
        config = config if config is not None else load_config()
        store = DashboardStore(config=config, storage=create_storage(config, session_state))
        session_state[StateKeys.STORE_INSTANCE] = store
        logger.info(
            f"Created session store with {config.storage_backend} storage "
            f"(snapshot key {StateKeys.snapshot_key(config)!r})"
        )
    return store
