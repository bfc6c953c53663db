"""
Orderman Models.

Re-exports:
    from orderman.models import Outlet, Order
"""

from .order import Order  # noqa: F401
from .outlet import Outlet  # noqa: F401
