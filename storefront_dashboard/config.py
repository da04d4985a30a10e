# -*- coding: utf-8 -*-
"""
店铺后台统一配置文件
定义存储路径、默认参数以及日志设置
"""

import os
import logging
import warnings
from dataclasses import dataclass


# 项目根目录配置
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

ENV_PREFIX = 'STOREFRONT_DASHBOARD_'


# === 状态存储默认配置 ===
class StoreDefaults:
    """状态存储相关的默认配置"""
    # 持久化
    STORAGE_NAME = 'dashboard-store'
    STORAGE_BACKEND = 'file'  # file / session / memory
    DATA_DIR = os.path.join(PROJECT_ROOT, 'data')
    SCHEMA_VERSION = 1

    # 未读计数：默认保持原有行为（允许减为负数）
    CLAMP_UNREAD_COUNT = False

    # 营收变化：'last' 记录最近一次同向变化，'max' 记录历史最大变化
    REVENUE_SWING_MODE = 'last'
    REVENUE_SWING_MODES = ('last', 'max')

    # 新订单：默认丢弃调用方传入的金额和客户，使用随机演示数据
    KEEP_CALLER_ORDER_FIELDS = False

    # 演示订单数据
    ORDER_AMOUNT_MIN = 100
    ORDER_AMOUNT_SPAN = 1000  # 金额范围 [100, 1100)
    CUSTOMER_SUFFIX_MAX = 10000


# === 界面默认配置 ===
class UIDefaults:
    """Streamlit界面相关的默认配置"""
    PAGE_TITLE = "店铺运营后台"
    NOTIFICATION_FILTER = 'all'
    NOTIFICATION_SORT = 'newest'
    MESSAGE_FILTER = 'all'
    MESSAGE_SORT = 'newest'
    ORDER_STATUS_FILTER = 'all'
    ORDER_SORT = 'newest'
    TIME_RANGE = '24h'

    TIME_RANGE_LABELS = {
        '24h': '近24小时',
        '7d': '近7天',
        '30d': '近30天',
        '90d': '近90天',
    }


# === 日志配置 ===
class LogDefaults:
    """日志相关的默认配置"""
    LEVEL = 'INFO'
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    # 需要静默的第三方日志
    NOISY_LOGGERS = [
        "streamlit",
        "streamlit.runtime",
        "streamlit.runtime.scriptrunner_utils",
        "streamlit.runtime.scriptrunner_utils.script_run_context",
        "streamlit.runtime.caching",
        "streamlit.runtime.state",
        "streamlit.runtime.state.session_state_proxy",
    ]


@dataclass
class StoreConfig:
    """状态存储运行时配置"""
    storage_name: str = StoreDefaults.STORAGE_NAME
    storage_backend: str = StoreDefaults.STORAGE_BACKEND
    data_dir: str = StoreDefaults.DATA_DIR
    clamp_unread_count: bool = StoreDefaults.CLAMP_UNREAD_COUNT
    revenue_swing_mode: str = StoreDefaults.REVENUE_SWING_MODE
    keep_caller_order_fields: bool = StoreDefaults.KEEP_CALLER_ORDER_FIELDS

    def __post_init__(self):
        if self.revenue_swing_mode not in StoreDefaults.REVENUE_SWING_MODES:
            raise ValueError(
                f"revenue_swing_mode must be one of {StoreDefaults.REVENUE_SWING_MODES}, "
                f"got {self.revenue_swing_mode!r}"
            )

    @property
    def storage_path(self) -> str:
        """JSON快照文件路径"""
        return os.path.join(self.data_dir, f"{self.storage_name}.json")


def load_config(environ=None) -> StoreConfig:
    """
    从环境变量读取配置，未设置的项使用默认值

    Args:
        environ: 环境变量映射，默认使用os.environ

    Returns:
        StoreConfig: 运行时配置
    """
    env = environ if environ is not None else os.environ

    def get(name, default):
        return env.get(ENV_PREFIX + name, default)

    def flag(name, default):
        value = env.get(ENV_PREFIX + name)
        if value is None:
            return default
        return value.strip().lower() in ('1', 'true', 'yes', 'on')

    return StoreConfig(
        storage_name=get('STORAGE_NAME', StoreDefaults.STORAGE_NAME),
        storage_backend=get('STORAGE_BACKEND', StoreDefaults.STORAGE_BACKEND),
        data_dir=get('DATA_DIR', StoreDefaults.DATA_DIR),
        clamp_unread_count=flag('CLAMP_UNREAD_COUNT', StoreDefaults.CLAMP_UNREAD_COUNT),
        revenue_swing_mode=get('REVENUE_SWING_MODE', StoreDefaults.REVENUE_SWING_MODE),
        keep_caller_order_fields=flag('KEEP_CALLER_ORDER_FIELDS', StoreDefaults.KEEP_CALLER_ORDER_FIELDS),
    )


def configure_logging(level=None):
    """
    设置根日志级别并静默Streamlit的重复警告

    Args:
        level: 日志级别名称，默认读取 STOREFRONT_DASHBOARD_LOG_LEVEL
    """
    level_name = (level or os.environ.get(ENV_PREFIX + 'LOG_LEVEL', LogDefaults.LEVEL)).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LogDefaults.FORMAT)

    # 抑制ScriptRunContext相关警告
    warnings.filterwarnings("ignore", message=".*missing ScriptRunContext.*")
    warnings.filterwarnings("ignore", message=".*Session state does not function.*")
    warnings.filterwarnings("ignore", category=UserWarning, module="streamlit.*")

    for logger_name in LogDefaults.NOISY_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.ERROR)
        logger.propagate = False
