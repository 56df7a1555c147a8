from activities.utilities.backup import BackupManager


def test_backup_and_restore(tmp_path):
    plan_file = tmp_path / "plan.json"
    plan_file.write_text('{"kids": [], "assignments": {}}', encoding="utf-8")
    manager = BackupManager(tmp_path)

    assert manager.create_backup("plan.json")
    backups = manager.list_backups("plan.json")
    assert len(backups) == 1

    plan_file.write_text('{"kids": [{"id": "k1", "name": "Ana"}], "assignments": {}}', encoding="utf-8")
    assert manager.restore_backup(backups[0]['name'], "plan.json")
    assert plan_file.read_text(encoding="utf-8") == '{"kids": [], "assignments": {}}'


def test_missing_file_and_pruning(tmp_path):
    manager = BackupManager(tmp_path, keep=2)
    assert not manager.create_backup("plan.json")
    assert manager.list_backups() == []

    (tmp_path / "plan.json").write_text("{}", encoding="utf-8")
    for _ in range(4):
        assert manager.create_backup("plan.json")
    assert len(manager.list_backups("plan.json")) == 2
    assert not manager.restore_backup("plan_missing.json", "plan.json")
