# -*- coding: utf-8 -*-
"""
演示数据生成器

新订单的编号、时间、客户和金额都由生成器提供，
测试中可替换为固定输出的生成器
"""

import random
import string
import time
from datetime import datetime, timezone
from typing import Optional, Protocol, runtime_checkable

from ..config import StoreDefaults

_BASE36 = string.digits + string.ascii_lowercase


def to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return ''.join(reversed(digits))


@runtime_checkable
class OrderDataGenerator(Protocol):
    """新订单和通知所需数据的来源"""

    def new_id(self) -> str: ...

    def now(self) -> datetime: ...

    def customer_name(self) -> str: ...

    def order_amount(self) -> float: ...


class RandomDataGenerator:
    """
    默认生成器

    编号格式为 "<毫秒时间戳base36>-<随机串>-<随机串>"，
    金额为 [100, 1100) 区间的整数，客户名为 "Customer <0-9999>"
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def _random_chunk(self) -> str:
        length = self.rng.randint(8, 13)
        return ''.join(self.rng.choice(_BASE36) for _ in range(length))

    def new_id(self) -> str:
        millis = int(time.time() * 1000)
        return f"{to_base36(millis)}-{self._random_chunk()}-{self._random_chunk()}"

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def customer_name(self) -> str:
        return f"Customer {self.rng.randrange(StoreDefaults.CUSTOMER_SUFFIX_MAX)}"

    def order_amount(self) -> float:
        return StoreDefaults.ORDER_AMOUNT_MIN + self.rng.randrange(StoreDefaults.ORDER_AMOUNT_SPAN)
