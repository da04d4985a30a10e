# -*- coding: utf-8 -*-
"""
店铺运营后台
"""

__version__ = "1.0.0"
