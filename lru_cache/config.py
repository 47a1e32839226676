import os

# --- Configuration ---
# Defaults for the demo host. The library itself takes every setting as a constructor argument.
# Kept as raw strings: the demo's argument parser converts and validates them.
DEFAULT_CAPACITY = os.environ.get("LRU_CACHE_DEFAULT_CAPACITY", "10")
DEMO_COUNT = os.environ.get("LRU_CACHE_DEMO_COUNT", "11")
LOG_LEVEL = os.environ.get("LRU_CACHE_LOG_LEVEL", "WARNING")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_FORMAT = "%(asctime)s - [%(name)s] - %(levelname)s - %(message)s"
