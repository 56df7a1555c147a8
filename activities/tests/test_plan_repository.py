import json
from activities.domain.Child import Child
from activities.domain.Plan import Plan
from activities.infra.Plan_Repository import PlanRepository


def test_missing_file_loads_none(tmp_path):
    assert PlanRepository(tmp_path / "plan.json").load() is None


def test_save_then_load(tmp_path):
    repo = PlanRepository(tmp_path / "plan.json")
    plan = Plan([Child("k1", "Ana", "#ff0000", "I4")], {"a_psy_mo": ["k1"]})
    repo.save(plan)
    assert repo.load() == plan
    assert list(tmp_path.glob(".plan_*")) == []


def test_corrupted_file_is_treated_as_absent(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text("{ this is not json", encoding="utf-8")
    assert PlanRepository(path).load() is None
    path.write_text(json.dumps({"kids": "nope"}), encoding="utf-8")
    assert PlanRepository(path).load() is None


def test_old_schema_is_migrated_and_persisted(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({
        "kids": [{"id": "k1", "name": "Ana", "color": "#ff0000"}],
        "assignments": {"m_hiphop_wed": ["k1"]},
    }), encoding="utf-8")
    plan = PlanRepository(path).load()
    assert plan.kids[0].grade == "1st"
    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["kids"][0]["grade"] == "1st"
