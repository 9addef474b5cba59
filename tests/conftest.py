import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tests.helpers import FixedCatalog, fill_row, make_session

__all__ = [
    "FixedCatalog",
    "fill_row",
    "make_session",
]
