"""Test configuration — ensure iron_analytics is importable without install."""
import sys
from pathlib import Path

# Add project root to path so `from iron_analytics.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))
