from pathlib import Path

# Centralized paths for data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
FIXTURE_FILE = DATA_DIR / 'mock_data.json'

__all__ = ['DATA_DIR', 'FIXTURE_FILE']
