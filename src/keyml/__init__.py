"""
KeyML: a small educational machine-learning toolkit on NumPy.
"""

from .domain import *  # noqa: F401,F403
from .infrastructure import *  # noqa: F401,F403
from .domain import __all__ as _domain_all
from .infrastructure import __all__ as _infrastructure_all

__version__ = "1.0.0"

__all__ = list(_domain_all) + list(_infrastructure_all)
