# Makes "tests" a package so test modules can use absolute imports
# (from tests.unit._samples import ...), whatever directory pytest runs from.
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
