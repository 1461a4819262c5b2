"""Tests for migrate_data.py."""
import json
import tempfile
import unittest
from pathlib import Path

from abra.shared.constants import CLIENTS_KEY, RECURRING_JOBS_KEY, SCHEDULE_KEY
from abra.storage import MemoryStore
from migrate_data import migrate_data


class TestMigrateData(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.source = Path(self.tmp.name)
        self.store = MemoryStore()

    def write(self, name, value):
        (self.source / name).write_text(json.dumps(value), encoding="utf-8")

    def test_seeds_all_documents(self):
        self.write("schedule.json", {
            "05-03-2026": {
                "Team_A": [{"id": "j1", "street": "Main Street", "house_number": "42"}],
                "Team_B": {"assigned_workers": ["Myka"], "addresses": []},
            }
        })
        self.write("recurring-jobs.json", [{
            "id": "r1", "street": "Main Street", "house_number": "42", "team_id": "Team_A",
            "start_date": "02-03-2026", "frequency": "weekly",
        }])

        results = migrate_data(self.source, self.store)

        self.assertEqual(results["schedule"]["date_count"], 1)
        self.assertEqual(results["recurring_jobs"]["rule_count"], 1)
        schedule = self.store.snapshot(SCHEDULE_KEY)
        self.assertEqual(schedule["05-03-2026"]["Team_A"]["assigned_workers"], [])
        self.assertEqual(schedule["05-03-2026"]["Team_B"]["assigned_workers"], ["Myka"])
        self.assertEqual(self.store.snapshot(RECURRING_JOBS_KEY)[0]["exceptions"], [])

    def test_out_of_range_records_do_not_abort(self):
        self.write("schedule.json", {
            "05-03-2026": {
                "Team_A": [
                    {"id": "x", "street": "Main Street", "house_number": "42", "expected_hours": -1},
                    {"id": "y", "street": "High Road", "house_number": "7", "expected_hours": 2},
                ],
            }
        })
        self.write("clients.json", [{"id": "c1", "name": "Smith", "street": "Main Street",
                                     "house_number": "42", "expected_hours": -4}])

        migrate_data(self.source, self.store)

        jobs = self.store.snapshot(SCHEDULE_KEY)["05-03-2026"]["Team_A"]["addresses"]
        self.assertEqual([(job["id"], job["expected_hours"]) for job in jobs], [("x", 0), ("y", 2)])
        self.assertEqual(self.store.snapshot(CLIENTS_KEY)[0]["expected_hours"], 0)

    def test_missing_clients_file_initialises_empty_list(self):
        results = migrate_data(self.source, self.store)
        self.assertEqual(self.store.snapshot(CLIENTS_KEY), [])
        self.assertFalse(results["schedule"]["migrated"])
        self.assertIsNone(self.store.snapshot(SCHEDULE_KEY))


if __name__ == "__main__":
    unittest.main()
