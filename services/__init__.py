# services/__init__.py
"""Services package for the profitability calculator"""

from . import auth
from . import project_store

__all__ = ['auth', 'project_store']
