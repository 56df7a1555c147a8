"""
Backup utility for the plan document.
A timestamped copy is taken before an import replaces the current plan.
"""
import shutil
from datetime import datetime
from pathlib import Path
import logging

from activities.utilities.config import BACKUP_KEEP

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages backups of data files."""

    def __init__(self, data_dir: Path, backup_dir: Path = None, keep: int = BACKUP_KEEP):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir or (self.data_dir / 'backups'))
        self.keep = keep

    def create_backup(self, filename: str) -> bool:
        """Create a timestamped backup of a data file."""
        source = self.data_dir / filename
        if not source.exists():
            logger.warning(f"File not found for backup: {filename}")
            return False
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            destination = self.backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, destination)
            logger.info(f"Backup created: {destination.name}")
            self._cleanup_old_backups(source.name)
            return True
        except OSError as e:
            logger.error(f"Backup failed for {filename}: {e}")
            return False

    def _cleanup_old_backups(self, filename: str):
        """Remove old backups, keeping only the most recent ones."""
        pattern = f"{Path(filename).stem}_*{Path(filename).suffix}"
        backups = sorted(self.backup_dir.glob(pattern), key=lambda p: p.name)
        for backup in backups[:-self.keep]:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup.name}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup.name}: {e}")

    def restore_backup(self, backup_filename: str, target_filename: str) -> bool:
        """Copy a backup back over ``target_filename`` (current file is backed up first)."""
        backup_path = self.backup_dir / backup_filename
        if not backup_path.exists():
            logger.error(f"Backup not found: {backup_filename}")
            return False
        destination = self.data_dir / target_filename
        if destination.exists():
            self.create_backup(destination.name)
        try:
            shutil.copy2(backup_path, destination)
        except OSError as e:
            logger.error(f"Restore failed for {backup_filename}: {e}")
            return False
        logger.info(f"Restored backup: {backup_filename} -> {target_filename}")
        return True

    def list_backups(self, filename: str = None) -> list:
        """List all backups (newest first) or backups for a specific file."""
        if not self.backup_dir.exists():
            return []
        pattern = f"{Path(filename).stem}_*{Path(filename).suffix}" if filename else "*"
        backups = sorted(self.backup_dir.glob(pattern), key=lambda p: p.name, reverse=True)
        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in backups
        ]
