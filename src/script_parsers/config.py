"""Configuration management for script_parsers"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from the project root .env (if any)
ROOT_DIR = Path(__file__).parent.parent.parent
ENV_PATH = ROOT_DIR / ".env"
load_dotenv(ENV_PATH)

DEFAULT_DELIMITER = ";"

# sqlglot dialect used by the grammar adapter
DEFAULT_DIALECT = os.getenv("SQL_DIALECT", "mysql")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Upper bound on diagnostics collected per statement
MAX_ERRORS = int(os.getenv("SQL_MAX_ERRORS", "10"))

LOG_CONFIG = {
    "max_bytes": 10 * 1024 * 1024,  # 10 MB
    "backup_count": 5,
}
