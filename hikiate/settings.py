"""
Settings and configuration for Hikiate.

Values can be overridden through environment variables.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Dictionary export - defaults to data/jmdict-eng.json
DEFAULT_DICT_PATH = DATA_DIR / "jmdict-eng.json"

# Environment variable for custom dictionary path
DICT_PATH = Path(os.environ.get("HIKIATE_DICT_PATH", DEFAULT_DICT_PATH))

# Download location for jmdict-simplified exports
JMDICT_SIMPLIFIED_URL = "https://github.com/scriptin/jmdict-simplified/releases"

# Debug mode
DEBUG = os.environ.get("HIKIATE_DEBUG", "").lower() in ("1", "true", "yes")

# Logging format used by the CLI
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
