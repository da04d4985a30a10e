# -*- coding: utf-8 -*-
"""
通知与消息面板
"""

import pandas as pd

from ..core.models import ReadFilter, SortOrder

READ_FILTER_LABELS = {'all': '全部', 'unread': '未读', 'read': '已读'}
SORT_LABELS = {'newest': '最新优先', 'oldest': '最早优先'}


def _controls(st_obj, filter_key, sort_key):
    col_filter, col_sort = st_obj.columns(2)
    col_filter.selectbox(
        "筛选", [f.value for f in ReadFilter],
        format_func=READ_FILTER_LABELS.get, key=filter_key,
    )
    col_sort.selectbox(
        "排序", [s.value for s in SortOrder],
        format_func=SORT_LABELS.get, key=sort_key,
    )


def _items_frame(rows) -> pd.DataFrame:
    frame = pd.DataFrame(rows)
    if not frame.empty:
        frame['时间'] = pd.to_datetime(frame['时间']).dt.strftime('%Y-%m-%d %H:%M')
    return frame


def display_inbox_tab(st_obj, session_state, store):
    tab_notifications, tab_messages = st_obj.tabs([
        f"通知 ({store.state.unread_count})",
        f"消息 ({store.state.unread_messages})",
    ])

    with tab_notifications:
        _controls(st_obj, 'inbox_notification_filter', 'inbox_notification_sort')
        filtered = store.filter_notifications(session_state['inbox_notification_filter'])
        notifications = store.sort_notifications(session_state['inbox_notification_sort'], filtered)

        if not notifications:
            st_obj.info("暂无通知。")
        for n in notifications:
            col_text, col_action = st_obj.columns([5, 1])
            marker = "" if n.is_read else "● "
            col_text.markdown(f"{marker}**{n.kind.value}** {n.message}  \n"
                              f"<small>{n.timestamp:%Y-%m-%d %H:%M}</small>", unsafe_allow_html=True)
            if not n.is_read and col_action.button("已读", key=f"inbox_read_n_{n.id}"):
                store.mark_notification_as_read(n.id)
                st_obj.rerun()

        if notifications and st_obj.button("清空通知", key="inbox_clear_notifications"):
            store.clear_notifications()
            st_obj.rerun()

    with tab_messages:
        _controls(st_obj, 'inbox_message_filter', 'inbox_message_sort')
        filtered = store.filter_messages(session_state['inbox_message_filter'])
        messages = store.sort_messages(session_state['inbox_message_sort'], filtered)

        st_obj.dataframe(
            _items_frame([
                {'发件人': m.sender, '内容': m.content,
                 '状态': '已读' if m.is_read else '未读', '时间': m.timestamp}
                for m in messages
            ]),
            use_container_width=True,
            hide_index=True,
        )

        unread = [m for m in messages if not m.is_read]
        if unread:
            selected = st_obj.selectbox(
                "标记为已读", unread,
                format_func=lambda m: f"{m.sender}: {m.content}",
                key="inbox_message_to_mark",
            )
            if st_obj.button("标记", key="inbox_mark_message"):
                store.mark_message_as_read(selected.id)
                st_obj.rerun()
