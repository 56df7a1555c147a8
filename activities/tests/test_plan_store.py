import tempfile
import threading
import time
import unittest
from pathlib import Path
from unittest import mock

from activities.domain.Plan import Plan
from activities.events.Event_Bus import EventBus, PLAN_CHANGED, PLAN_ASSIGNMENT_REJECTED, PLAN_REPLACED
from activities.infra.Catalog_Repository import load_catalog
from activities.infra.Plan_Repository import PlanRepository
from activities.infra.Plan_Store import PlanStore, RejectionReason
from activities.logic.eligibility.grades import is_eligible


class TestPlanStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.plan_file = Path(self._tmp.name) / "plan.json"
        self.bus = EventBus()
        self.events = []
        for name in (PLAN_CHANGED, PLAN_ASSIGNMENT_REJECTED, PLAN_REPLACED):
            self.bus.subscribe(name, lambda event, payload: self.events.append((event, payload)))
        self.store = PlanStore(PlanRepository(self.plan_file), load_catalog(), event_bus=self.bus)

    def tearDown(self):
        self._tmp.cleanup()

    def _reload(self) -> Plan:
        return PlanRepository(self.plan_file).load()

    def test_starts_empty_and_adds_kids_in_order(self):
        self.assertEqual(self.store.plan, Plan())
        ana = self.store.add_kid("  Ana ", "#ff0000", "1st")
        leo = self.store.add_kid("Leo", grade="I4")
        self.assertEqual(ana.name, "Ana")
        self.assertEqual([k.id for k in self._reload().kids], [ana.id, leo.id])

    def test_add_kid_rejects_bad_input(self):
        with self.assertRaises(ValueError):
            self.store.add_kid("   ")
        with self.assertRaises(ValueError):
            self.store.add_kid("Ana", grade="7th")
        self.assertEqual(self.store.plan.kids, [])

    def test_toggle_adds_then_removes(self):
        kid = self.store.add_kid("Ana", grade="1st")
        added = self.store.toggle_assignment("m_hiphop_wed", kid.id)
        self.assertTrue(added.ok)
        self.assertEqual(added.action, "added")
        self.assertEqual(self._reload().assignments["m_hiphop_wed"], [kid.id])
        removed = self.store.toggle_assignment("m_hiphop_wed", kid.id)
        self.assertEqual(removed.action, "removed")
        self.assertEqual(self._reload().assignments["m_hiphop_wed"], [])

    def test_ineligible_assignment_is_rejected_without_change(self):
        kid = self.store.add_kid("Ana", grade="1st")
        before = self.store.plan.to_dict()
        result = self.store.toggle_assignment("a_psy_mo", kid.id)
        self.assertFalse(result)
        self.assertEqual(result.reason, RejectionReason.NOT_ELIGIBLE)
        self.assertIn("Ana (1st)", result.message)
        self.assertEqual(self.store.plan.to_dict(), before)
        self.assertEqual(self.events[-1][0], PLAN_ASSIGNMENT_REJECTED)
        self.assertEqual(self.events[-1][1]["reason"], "not_eligible")

    def test_unknown_ids_are_rejected(self):
        kid = self.store.add_kid("Ana")
        self.assertEqual(self.store.toggle_assignment("nope", kid.id).reason, RejectionReason.UNKNOWN_ACTIVITY)
        self.assertEqual(self.store.toggle_assignment("m_hiphop_wed", "nope").reason, RejectionReason.UNKNOWN_KID)

    def test_removal_allowed_even_when_no_longer_eligible(self):
        # imported plans may hold ineligible assignments; removing them must still work
        self.store.replace(Plan.from_dict({
            "kids": [{"id": "k1", "name": "Ana", "color": "#ff0000", "grade": "6th"}],
            "assignments": {"a_psy_mo": ["k1"]},
        }))
        self.assertEqual(self.store.toggle_assignment("a_psy_mo", "k1").action, "removed")

    def test_remove_kid_cascades(self):
        ana = self.store.add_kid("Ana", grade="1st")
        pau = self.store.add_kid("Pau", grade="1st")
        for activity_id in ("m_chess_1-2_tue", "m_rhythmic_tue", "m_en_i4-2_mon"):
            self.store.toggle_assignment(activity_id, ana.id)
        self.store.toggle_assignment("m_chess_1-2_tue", pau.id)
        self.assertTrue(self.store.remove_kid(ana.id))
        self.assertFalse(self.store.remove_kid(ana.id))
        for kid_ids in self._reload().assignments.values():
            self.assertNotIn(ana.id, kid_ids)
        self.assertEqual(list(self.store.financials()['per_kid']), [pau.id])
        self.assertEqual(self.store.conflicts(), [])

    def test_queries(self):
        kid = self.store.add_kid("Ana", grade="1st")
        self.store.toggle_assignment("m_chess_1-2_tue", kid.id)
        self.store.toggle_assignment("m_rhythmic_tue", kid.id)
        self.assertEqual(len(self.store.conflicts()), 1)
        self.assertEqual(self.store.financials(False)['total_term'], 75)
        self.assertTrue(self.store.check_eligibility("m_robotics_thu", kid.id))

    def test_clear_and_restore_from_disk(self):
        kid = self.store.add_kid("Ana")
        self.store.toggle_assignment("m_hiphop_wed", kid.id)
        restored = PlanStore(PlanRepository(self.plan_file), load_catalog(), event_bus=self.bus)
        self.assertEqual(restored.plan, self.store.plan)
        self.store.clear()
        self.assertEqual(self._reload(), Plan())
        self.assertEqual(self.events[-1][1]["action"], "cleared")

    def _slow_eligibility(self):
        def slow(activity, kid):
            time.sleep(0.05)
            return is_eligible(activity, kid)
        return mock.patch("activities.infra.Plan_Store.is_eligible", side_effect=slow)

    def test_concurrent_toggles_are_not_lost(self):
        ana = self.store.add_kid("Ana", grade="1st")
        leo = self.store.add_kid("Leo", grade="2nd")
        with self._slow_eligibility():
            threads = [threading.Thread(target=self.store.toggle_assignment, args=("m_hiphop_wed", kid.id))
                       for kid in (ana, leo)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        self.assertCountEqual(self.store.plan.assignments["m_hiphop_wed"], [ana.id, leo.id])
        self.assertCountEqual(self._reload().assignments["m_hiphop_wed"], [ana.id, leo.id])

    def test_removal_during_toggle_leaves_no_orphans(self):
        ana = self.store.add_kid("Ana", grade="1st")
        with self._slow_eligibility():
            toggle = threading.Thread(target=self.store.toggle_assignment, args=("m_hiphop_wed", ana.id))
            toggle.start()
            time.sleep(0.01)
            self.store.remove_kid(ana.id)
            toggle.join()
        for plan in (self.store.plan, self._reload()):
            self.assertEqual(plan.kids, [])
            for kid_ids in plan.assignments.values():
                self.assertNotIn(ana.id, kid_ids)

    def test_failed_save_leaves_plan_unchanged(self):
        kid = self.store.add_kid("Ana", grade="1st")
        before = self.store.plan.to_dict()
        events = len(self.events)
        with mock.patch.object(self.store.repository, "save", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                self.store.toggle_assignment("m_hiphop_wed", kid.id)
            with self.assertRaises(OSError):
                self.store.remove_kid(kid.id)
            with self.assertRaises(OSError):
                self.store.add_kid("Leo")
            with self.assertRaises(OSError):
                self.store.clear()
            with self.assertRaises(OSError):
                self.store.replace(Plan())
        self.assertEqual(self.store.plan.to_dict(), before)
        self.assertEqual(self._reload().to_dict(), before)
        self.assertEqual(len(self.events), events)

    def test_reload_picks_up_file_changes(self):
        self.store.add_kid("Ana")
        PlanRepository(self.plan_file).save(Plan())
        self.assertEqual(self.store.reload(), Plan())
        self.assertEqual(self.events[-1][0], PLAN_REPLACED)

    def test_failing_subscriber_does_not_break_mutation(self):
        def boom(event, payload):
            raise RuntimeError("listener failure")
        self.bus.subscribe(PLAN_CHANGED, boom)
        kid = self.store.add_kid("Ana")
        self.assertIsNotNone(self._reload().find_kid(kid.id))


if __name__ == '__main__':
    unittest.main()
