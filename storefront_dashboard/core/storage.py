# -*- coding: utf-8 -*-
"""
快照持久化后端

- JsonFileStorage: 数据目录下的JSON文件
- SessionStateStorage: Streamlit session_state（每个浏览器会话一份）
- MemoryStorage: 进程内dict，测试和无持久化场景使用

读取失败时返回None，写入失败时记录日志并忽略；内存中的状态始终是权威数据
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Protocol, runtime_checkable

from ..config import StoreConfig, StoreDefaults


@runtime_checkable
class SnapshotStorage(Protocol):
    """持久化后端接口：load 不存在时返回None，save 失败时抛出异常"""

    def load(self, name: str) -> Optional[Dict[str, Any]]: ...

    def save(self, name: str, document: Dict[str, Any]) -> None: ...


class MemoryStorage:
    """进程内存储"""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.documents: Dict[str, Any] = dict(initial or {})

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        return self.documents.get(name)

    def save(self, name: str, document: Dict[str, Any]) -> None:
        self.documents[name] = document


class SessionStateStorage:
    """
    将快照保存在Streamlit session_state中

    Args:
        session_state: Streamlit session state对象，默认使用st.session_state
    """

    def __init__(self, session_state: Optional[MutableMapping] = None):
        if session_state is None:
            import streamlit as st
            session_state = st.session_state
        self.session_state = session_state
        self.logger = logging.getLogger(__name__)

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        document = self.session_state.get(name)
        if document is None:
            return None
        if not isinstance(document, dict):
            self.logger.warning(f"Ignoring non-dict snapshot under session key {name}")
            return None
        return document

    def save(self, name: str, document: Dict[str, Any]) -> None:
        self.session_state[name] = document


class JsonFileStorage:
    """
    将快照保存为 <data_dir>/<name>.json

    Args:
        data_dir: 数据目录，不存在时在首次写入时创建
    """

    def __init__(self, data_dir: str = StoreDefaults.DATA_DIR):
        self.data_dir = Path(data_dir)
        self.logger = logging.getLogger(__name__)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(name)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to read snapshot {path}: {e}")
            return None
        if not isinstance(document, dict):
            self.logger.warning(f"Ignoring snapshot {path}: top level is not an object")
            return None
        return document

    def save(self, name: str, document: Dict[str, Any]) -> None:
        """
        原子写入快照

        每次写入使用同目录下唯一命名的临时文件，完成后替换目标文件；
        写入失败时删除临时文件并重新抛出异常
        """
        path = self.path_for(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix='.tmp', dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def create_storage(config: StoreConfig, session_state: Optional[MutableMapping] = None) -> SnapshotStorage:
    """
    根据配置创建持久化后端

    Args:
        config: 运行时配置
        session_state: 使用session后端时的session state

    Returns:
        存储后端实例
    """
    backend = config.storage_backend
    if backend == 'file':
        return JsonFileStorage(config.data_dir)
    if backend == 'session':
        return SessionStateStorage(session_state)
    if backend == 'memory':
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend!r}")
