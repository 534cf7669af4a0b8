import unittest
from itertools import combinations

from plan2read.actions import LocalBackend
from plan2read.errors import (
    ConflictError,
    PlannerError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)
from plan2read.gateway import RemoteStoreGateway
from plan2read.preferences import PreferenceStore
from plan2read.repository import ScheduleRepository
from plan2read.timeutil import Weekday
from plan2read.transports import LocalTransport, Transport

USER = "user_me"


class SwitchableTransport(Transport):
    """Local backend whose actions can be made to fail like a dropped connection"""

    def __init__(self):
        self.inner = LocalTransport(LocalBackend("sqlite://"))
        self.failing = set()
        self.sent = []

    def send(self, action, payload):
        self.sent.append(action)
        if action in self.failing:
            raise TransportError("Backend unreachable: simulated outage")
        return self.inner.send(action, payload)


class RepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.transport = SwitchableTransport()
        self.gateway = RemoteStoreGateway(self.transport)
        self.prefs = PreferenceStore()
        self.repo = ScheduleRepository(self.gateway, USER, self.prefs)

    def make_schedule(self, name="Week A"):
        schedule_id = self.repo.create_schedule(name)
        self.repo.load_schedule(schedule_id)
        return schedule_id


class TestScheduleLoading(RepositoryTestCase):
    def test_load_schedules_keeps_only_own_rows(self) -> None:
        self.gateway.create_schedule("mine", USER, "Mine")
        self.gateway.create_schedule("theirs", "someone_else", "Theirs", is_public=True)
        self.gateway.create_schedule("hidden", "someone_else", "Hidden")

        rows = self.repo.load_schedules()
        self.assertEqual([s.id for s in rows], ["mine"])

    def test_load_schedules_failure_leaves_list_unchanged(self) -> None:
        self.make_schedule()
        before = list(self.repo.schedules)
        self.transport.failing.add("getSchedules")
        with self.assertRaises(TransportError):
            self.repo.load_schedules()
        self.assertEqual(self.repo.schedules, before)

    def test_load_unknown_schedule_is_a_no_op(self) -> None:
        schedule_id = self.make_schedule()
        self.transport.sent.clear()

        self.assertIsNone(self.repo.load_schedule("does-not-exist"))
        self.assertEqual(self.repo.current_schedule.id, schedule_id)
        self.assertEqual(self.transport.sent, [])
        self.assertEqual(self.prefs.current_schedule_id, schedule_id)

    def test_reload_is_idempotent(self) -> None:
        schedule_id = self.make_schedule()
        self.repo.add_session("Math", "09:00", "10:00", day="Monday")
        self.repo.add_session("Physics", "13:00", "14:30", day="Wednesday")

        first = [s.model_dump_json() for s in self.repo.load_schedule(schedule_id).sessions]
        second = [s.model_dump_json() for s in self.repo.load_schedule(schedule_id).sessions]
        self.assertEqual(first, second)
        self.assertEqual(len(first), 2)

    def test_failed_session_fetch_keeps_current_schedule(self) -> None:
        first_id = self.make_schedule("First")
        second_id = self.repo.create_schedule("Second")
        self.transport.failing.add("getSessions")
        with self.assertRaises(TransportError):
            self.repo.load_schedule(second_id)
        self.assertEqual(self.repo.current_schedule.id, first_id)

    def test_open_planner_restores_remembered_schedule(self) -> None:
        self.repo.create_schedule("First")
        second_id = self.repo.create_schedule("Second")
        self.prefs.current_schedule_id = second_id

        fresh = ScheduleRepository(self.gateway, USER, self.prefs)
        self.assertEqual(fresh.open_planner().id, second_id)

    def test_open_planner_falls_back_to_first_schedule(self) -> None:
        first_id = self.repo.create_schedule("First")
        self.repo.create_schedule("Second")
        self.prefs.current_schedule_id = "stale"

        fresh = ScheduleRepository(self.gateway, USER, self.prefs)
        self.assertEqual(fresh.open_planner().id, first_id)

    def test_open_planner_without_schedules(self) -> None:
        self.assertIsNone(self.repo.open_planner())
        self.assertIsNone(self.repo.current_schedule)

    def test_create_schedule_requires_name(self) -> None:
        with self.assertRaises(ValidationError):
            self.repo.create_schedule("   ")
        self.assertNotIn("createSchedule", self.transport.sent)

    def test_delete_schedule_is_not_supported(self) -> None:
        self.make_schedule()
        with self.assertRaises(UnsupportedOperationError) as cm:
            self.repo.delete_schedule()
        self.assertIn("not yet supported", str(cm.exception))


class TestAddSession(RepositoryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_schedule()
        self.repo.select_day("Monday")

    def test_touching_sessions_are_accepted(self) -> None:
        self.repo.add_session("Math", "10:00", "11:00")
        self.repo.add_session("Biology", "11:00", "12:00")
        self.assertEqual([s.subject for s in self.repo.sessions_for_day()], ["Math", "Biology"])

    def test_overlap_is_a_conflict(self) -> None:
        self.repo.add_session("Math", "10:00", "11:00")
        self.transport.sent.clear()
        with self.assertRaises(ConflictError) as cm:
            self.repo.add_session("Chemistry", "10:30", "11:30")
        self.assertEqual(cm.exception.code, "CONFLICT")
        self.assertEqual(self.transport.sent, [])
        self.assertEqual(len(self.repo.current_schedule.sessions), 1)

    def test_same_time_on_another_day_is_fine(self) -> None:
        self.repo.add_session("Math", "10:00", "11:00")
        self.repo.add_session("Math", "10:00", "11:00", day="Tuesday")
        self.assertEqual(self.repo.session_counts()[Weekday.TUESDAY], 1)

    def test_start_must_precede_end(self) -> None:
        for start, end in (("09:00", "09:00"), ("10:00", "09:00")):
            with self.subTest(start=start, end=end):
                with self.assertRaises(ValidationError) as cm:
                    self.repo.add_session("Math", start, end)
                self.assertEqual(cm.exception.code, "VALIDATION")

    def test_time_order_checked_before_overlap(self) -> None:
        self.repo.add_session("Math", "09:00", "10:00")
        with self.assertRaises(ValidationError):
            self.repo.add_session("Math", "09:30", "09:30")

    def test_missing_fields(self) -> None:
        for args in (("", "09:00", "10:00"), ("Math", "", "10:00"), ("Math", "09:00", "")):
            with self.subTest(args=args):
                with self.assertRaises(ValidationError):
                    self.repo.add_session(*args)

    def test_malformed_time(self) -> None:
        with self.assertRaises(ValidationError):
            self.repo.add_session("Math", "9am", "10:00")

    def test_requires_loaded_schedule_and_day(self) -> None:
        repo = ScheduleRepository(self.gateway, USER, PreferenceStore())
        with self.assertRaises(ValidationError):
            repo.add_session("Math", "09:00", "10:00", day="Monday")

        self.repo.clear_day()
        with self.assertRaises(ValidationError):
            self.repo.add_session("Math", "09:00", "10:00")

    def test_gateway_failure_leaves_sessions_unchanged(self) -> None:
        self.repo.add_session("Math", "09:00", "10:00")
        self.transport.failing.add("addSession")
        with self.assertRaises(TransportError):
            self.repo.add_session("History", "12:00", "13:00")
        self.assertEqual(len(self.repo.current_schedule.sessions), 1)

    def test_explicit_day_keeps_selected_day(self) -> None:
        self.repo.add_session("Math", "09:00", "10:00")
        self.transport.failing.add("addSession")
        rejected = [
            (ValidationError, ("", "09:00", "10:00")),
            (ValidationError, ("Math", "10:00", "09:00")),
            (TransportError, ("Math", "11:00", "12:00")),
        ]
        for error, args in rejected:
            with self.subTest(args=args):
                with self.assertRaises(error):
                    self.repo.add_session(*args, day="Friday")
                self.assertEqual(self.repo.selected_day, Weekday.MONDAY)

        with self.assertRaises(ValidationError):
            self.repo.add_session("Math", "09:00", "10:00", day="Someday")
        self.assertEqual(self.repo.selected_day, Weekday.MONDAY)

        self.transport.failing.clear()
        with self.assertRaises(ConflictError):
            self.repo.add_session("Physics", "09:30", "10:30", day="monday")
        self.repo.add_session("Art", "09:00", "10:00", day="Friday")
        self.assertEqual(self.repo.selected_day, Weekday.MONDAY)

    def test_accepted_session_is_stored_remotely(self) -> None:
        session = self.repo.add_session("Math", "9:00", "10:15")
        self.assertEqual((session.start_time, session.end_time), ("09:00", "10:15"))
        remote = self.gateway.get_sessions(self.repo.current_schedule.id)
        self.assertEqual([s.id for s in remote], [session.id])

    def test_overlap_invariant_after_many_adds(self) -> None:
        attempts = [
            ("08:00", "09:00"), ("08:30", "09:30"), ("09:00", "10:00"), ("07:00", "12:00"),
            ("10:00", "10:30"), ("10:15", "10:45"), ("11:59", "12:00"), ("06:00", "08:00"),
        ]
        for start, end in attempts:
            try:
                self.repo.add_session("Subject", start, end)
            except PlannerError:
                pass

        ranges = [s.time_range for s in self.repo.sessions_for_day("Monday")]
        self.assertEqual(len(ranges), 5)
        for a, b in combinations(ranges, 2):
            self.assertFalse(a.overlaps(b), f"{a} overlaps {b}")


class TestDeleteSession(RepositoryTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_schedule()
        self.session = self.repo.add_session("Math", "09:00", "10:00", day="Friday")

    def test_delete_removes_locally_after_remote(self) -> None:
        self.repo.delete_session(self.session.id)
        self.assertEqual(self.repo.current_schedule.sessions, [])
        self.assertEqual(self.gateway.get_sessions(self.repo.current_schedule.id), [])

    def test_failed_delete_keeps_cache(self) -> None:
        self.transport.failing.add("deleteSession")
        with self.assertRaises(TransportError):
            self.repo.delete_session(self.session.id)
        self.assertEqual(len(self.repo.current_schedule.sessions), 1)

    def test_missing_row_is_not_found(self) -> None:
        self.repo.delete_session(self.session.id)
        with self.assertRaises(TransportError) as cm:
            self.repo.delete_session(self.session.id)
        self.assertEqual(cm.exception.code, "NOT_FOUND")


class TestDayViews(RepositoryTestCase):
    def test_sessions_for_day_sorted_and_counts(self) -> None:
        self.make_schedule()
        self.repo.add_session("Late", "15:00", "16:00", day="Thursday")
        self.repo.add_session("Early", "08:00", "09:00", day="Thursday")
        self.repo.add_session("Other", "08:00", "09:00", day="Saturday")

        self.assertEqual([s.subject for s in self.repo.sessions_for_day("thursday")], ["Early", "Late"])
        counts = self.repo.session_counts()
        self.assertEqual(list(counts), list(Weekday))
        self.assertEqual(counts[Weekday.THURSDAY], 2)
        self.assertEqual(counts[Weekday.MONDAY], 0)

    def test_select_unknown_day(self) -> None:
        with self.assertRaises(ValidationError):
            self.repo.select_day("Someday")


if __name__ == "__main__":
    unittest.main()
