"""Configuration management for the Activities Planner application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Financial view
NORMALIZE_MONTHLY_DEFAULT: Final[bool] = os.getenv('NORMALIZE_MONTHLY', 'True').lower() == 'true'
CURRENCY_SYMBOL: Final[str] = "€"

# Backups taken before an import replaces the plan
BACKUP_KEEP: Final[int] = int(os.getenv('BACKUP_KEEP', '10'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data'))).resolve()
PLAN_FILE: Final[Path] = Path(os.getenv('PLAN_FILE', str(DATA_DIR / 'plan.json'))).resolve()
CATALOG_FILE: Final[Path] = Path(os.getenv('CATALOG_FILE', str(BASE_DIR / 'data' / 'catalog.json'))).resolve()
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
