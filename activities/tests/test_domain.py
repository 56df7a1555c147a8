import unittest
from activities.domain.Activity import Activity
from activities.domain.Child import Child
from activities.domain.Plan import Plan


class TestDomain(unittest.TestCase):

    def test_child_without_grade_defaults_to_first(self):
        kid = Child.from_dict({"id": "k1", "name": "Ana", "color": "#ff0000"})
        self.assertEqual(kid.grade, "1st")
        self.assertEqual(kid.to_dict(), {"id": "k1", "name": "Ana", "color": "#ff0000", "grade": "1st"})

    def test_plan_migration_flags(self):
        plan, migrated = Plan.from_dict_with_migration({
            "kids": [{"id": "k1", "name": "Ana", "color": "#ff0000"}],
            "assignments": {"a1": ["k1", "k1"]},
        })
        self.assertTrue(migrated)
        self.assertEqual(plan.assignments, {"a1": ["k1"]})
        _, migrated_again = Plan.from_dict_with_migration(plan.to_dict())
        self.assertFalse(migrated_again)

    def test_plan_queries(self):
        plan = Plan([Child("k1", "Ana")], {"a1": ["k1"]})
        self.assertEqual(plan.find_kid("k1").name, "Ana")
        self.assertIsNone(plan.find_kid("nope"))
        self.assertTrue(plan.is_assigned("a1", "k1"))
        self.assertFalse(plan.is_assigned("a2", "k1"))
        self.assertEqual(plan.assigned_kids("a2"), [])

    def test_plan_copy_is_independent(self):
        plan = Plan([Child("k1", "Ana")], {"a1": ["k1"]})
        clone = plan.copy()
        clone.assignments["a1"].append("k2")
        clone.kids[0].name = "Other"
        self.assertEqual(plan.assignments["a1"], ["k1"])
        self.assertEqual(plan.kids[0].name, "Ana")

    def test_activity_to_dict_omits_unset_fields(self):
        a = Activity.from_dict({"id": "a1", "name": "Chess", "day": "Monday", "slot": "Midday",
                                "grades": "1st–2nd", "price": 75, "period": "term", "unknown": 1})
        self.assertNotIn("materials_fee", a.to_dict())
        self.assertFalse(a.is_monthly)
        self.assertEqual(a, Activity.from_dict(a.to_dict()))


if __name__ == '__main__':
    unittest.main()
