from pathlib import Path

from activities.utilities.config import DATA_DIR, PLAN_FILE, CATALOG_FILE

# Centralized paths for data files (single source of truth)
BACKUP_DIR: Path = DATA_DIR / 'backups'

__all__ = ['DATA_DIR', 'PLAN_FILE', 'CATALOG_FILE', 'BACKUP_DIR']
