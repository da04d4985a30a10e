# -*- coding: utf-8 -*-
"""
店铺运营后台 - 主dashboard

运行: streamlit run storefront_dashboard/dashboard.py
"""

import os
import sys
import traceback

# 设置环境变量禁用Streamlit使用统计
os.environ.setdefault('STREAMLIT_BROWSER_GATHER_USAGE_STATS', 'false')

# 获取项目根目录并加入 sys.path，保证以脚本方式运行时可以导入包
current_dir = os.path.dirname(__file__)
project_root = os.path.abspath(os.path.join(current_dir, '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import streamlit as st

from storefront_dashboard.config import UIDefaults, configure_logging

# 页面配置（必须是第一个Streamlit命令）
st.set_page_config(page_title=UIDefaults.PAGE_TITLE, layout="wide")

configure_logging()

from storefront_dashboard.core import get_session_store
from storefront_dashboard.views import display_inbox_tab, display_orders_tab, display_overview_tab

MODULE_CONFIG = {
    "概览": display_overview_tab,
    "订单": display_orders_tab,
    "通知与消息": display_inbox_tab,
}

store = get_session_store(st.session_state)

# --- Sidebar ---
with st.sidebar:
    st.title(f"🛒 {UIDefaults.PAGE_TITLE}")

    st.text_input(
        "搜索",
        value=store.state.search_query,
        key='ui_search_box',
        on_change=lambda: store.set_search_query(st.session_state['ui_search_box']),
    )

    summary = store.get_state_summary()
    st.caption(
        f"未读通知 {summary['unread_count']} · 未读消息 {summary['unread_messages']} · "
        f"待处理订单 {summary['orders']['new'] + summary['orders']['pending']}"
    )

    st.subheader("选择功能模块")
    current_module = st.radio(
        "主模块:",
        list(MODULE_CONFIG.keys()),
        key='ui_main_module',
        label_visibility="collapsed",
    )

# --- Main ---
try:
    MODULE_CONFIG[current_module](st, st.session_state, store)
except Exception as e:
    st.error(f"加载 {current_module} 页面时出错: {e}")
    st.error(traceback.format_exc())
