"""Tests for abra/domain/schedule/projection.py."""
import unittest

from abra.domain.recurring.schemas import RecurringRule
from abra.domain.schedule.projection import (
    build_instance,
    instance_id,
    is_occurrence,
    project_recurring_jobs,
)
from abra.domain.schedule.repository import default_window, encode_schedule
from abra.domain.schedule.schemas import Job


def make_rule(**overrides):
    fields = {
        "id": "r1",
        "client_name": "Smith",
        "street": "Main Street",
        "house_number": "42",
        "team_id": "Team_A",
        "start_date": "02-03-2026",  # Monday
        "frequency": "weekly",
        "time_interval": "09:00 - 11:00",
        "expected_hours": 2,
    }
    fields.update(overrides)
    return RecurringRule(**fields)


def job_ids(schedule, date_key, team="Team_A"):
    return [job.id for job in schedule[date_key][team].addresses]


class TestIsOccurrence(unittest.TestCase):
    """Tests for is_occurrence."""

    def test_weekly_same_weekday(self):
        rule = make_rule()
        self.assertTrue(is_occurrence(rule, "02-03-2026"))
        self.assertTrue(is_occurrence(rule, "09-03-2026"))
        self.assertTrue(is_occurrence(rule, "16-03-2026"))

    def test_weekly_other_weekday(self):
        self.assertFalse(is_occurrence(make_rule(), "10-03-2026"))

    def test_before_start_date(self):
        self.assertFalse(is_occurrence(make_rule(), "23-02-2026"))

    def test_fortnightly_alignment(self):
        rule = make_rule(frequency="fortnightly")
        self.assertTrue(is_occurrence(rule, "02-03-2026"))
        self.assertFalse(is_occurrence(rule, "09-03-2026"))
        self.assertTrue(is_occurrence(rule, "16-03-2026"))
        self.assertFalse(is_occurrence(rule, "23-03-2026"))
        self.assertTrue(is_occurrence(rule, "30-03-2026"))

    def test_exception_date(self):
        rule = make_rule(exceptions=["09-03-2026"])
        self.assertFalse(is_occurrence(rule, "09-03-2026"))
        self.assertTrue(is_occurrence(rule, "16-03-2026"))

    def test_paused(self):
        self.assertFalse(is_occurrence(make_rule(paused=True), "09-03-2026"))


class TestBuildInstance(unittest.TestCase):

    def test_instance_fields(self):
        job = build_instance(make_rule(), "09-03-2026")
        self.assertEqual(job.id, "r1_09-03-2026")
        self.assertEqual(job.id, instance_id("r1", "09-03-2026"))
        self.assertEqual(job.recurring_id, "r1")
        self.assertTrue(job.is_recurring)
        self.assertEqual(job.status.value, "pending")
        self.assertEqual(job.client_name, "Smith")
        self.assertEqual(job.time_interval, "09:00 - 11:00")
        self.assertEqual(job.expected_hours, 2)
        self.assertTrue(job.maps_url.endswith("42%20Main%20Street"))

    def test_blank_optional_fields_are_omitted(self):
        job = build_instance(make_rule(client_name="", notes=""), "09-03-2026")
        data = job.to_json()
        self.assertNotIn("client_name", data)
        self.assertNotIn("notes", data)
        self.assertEqual(data["frequency"], "weekly")


class TestProjectRecurringJobs(unittest.TestCase):
    """Tests for project_recurring_jobs."""

    def setUp(self):
        self.schedule = default_window("02-03-2026", 14)

    def test_weekly_projection(self):
        dates = ["02-03-2026", "09-03-2026", "10-03-2026"]
        result = project_recurring_jobs(self.schedule, [make_rule()], dates)

        self.assertEqual(job_ids(result, "02-03-2026"), ["r1_02-03-2026"])
        self.assertEqual(job_ids(result, "09-03-2026"), ["r1_09-03-2026"])
        self.assertEqual(job_ids(result, "10-03-2026"), [])
        self.assertEqual(job_ids(result, "09-03-2026", "Team_B"), [])

    def test_only_requested_dates_are_projected(self):
        result = project_recurring_jobs(self.schedule, [make_rule()], ["09-03-2026"])
        self.assertEqual(job_ids(result, "02-03-2026"), [])

    def test_inputs_not_mutated(self):
        rule = make_rule()
        before = encode_schedule(self.schedule)
        project_recurring_jobs(self.schedule, [rule], list(self.schedule))
        self.assertEqual(encode_schedule(self.schedule), before)
        self.assertEqual(rule.exceptions, [])

    def test_projection_is_idempotent(self):
        rules = [make_rule()]
        dates = list(self.schedule)
        once = project_recurring_jobs(self.schedule, rules, dates)
        twice = project_recurring_jobs(once, rules, dates)
        self.assertEqual(encode_schedule(twice), encode_schedule(once))

    def test_stored_instance_suppresses_projection(self):
        stored = Job(id="concrete", street="Main Street", house_number="42", recurring_id="r1")
        self.schedule["09-03-2026"]["Team_A"].addresses.append(stored)

        result = project_recurring_jobs(self.schedule, [make_rule()], ["09-03-2026"])
        self.assertEqual(job_ids(result, "09-03-2026"), ["concrete"])

    def test_creates_missing_day(self):
        result = project_recurring_jobs({}, [make_rule()], ["09-03-2026"])
        self.assertEqual(job_ids(result, "09-03-2026"), ["r1_09-03-2026"])
        self.assertEqual(result["09-03-2026"]["Team_B"].addresses, [])

    def test_pause_and_resume(self):
        dates = ["09-03-2026"]
        paused = project_recurring_jobs(self.schedule, [make_rule(paused=True)], dates)
        self.assertEqual(job_ids(paused, "09-03-2026"), [])

        resumed = project_recurring_jobs(self.schedule, [make_rule(paused=False)], dates)
        self.assertEqual(job_ids(resumed, "09-03-2026"), ["r1_09-03-2026"])

    def test_team_b_rule(self):
        result = project_recurring_jobs(
            self.schedule, [make_rule(team_id="Team_B")], ["09-03-2026"]
        )
        self.assertEqual(job_ids(result, "09-03-2026", "Team_B"), ["r1_09-03-2026"])
        self.assertEqual(job_ids(result, "09-03-2026"), [])

    def test_invalid_start_date_is_skipped(self):
        rules = [make_rule(id="bad", start_date="31-04-2026"), make_rule()]
        result = project_recurring_jobs(self.schedule, rules, ["09-03-2026"])
        self.assertEqual(job_ids(result, "09-03-2026"), ["r1_09-03-2026"])

    def test_invalid_date_keys_are_ignored(self):
        result = project_recurring_jobs(self.schedule, [make_rule()], ["not-a-date"])
        self.assertNotIn("not-a-date", result)


if __name__ == "__main__":
    unittest.main()
