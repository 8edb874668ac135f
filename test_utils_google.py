import datetime
import os
import unittest
from unittest import mock

import pytz

from syllabus_calendar.models import CalendarEventDescriptor
from syllabus_calendar.utils import google
from syllabus_calendar.utils.google import CalendarClient, GoogleCalendarSession

TOKYO = pytz.timezone("Asia/Tokyo")


class FakeRequest:
    def __init__(self, response: dict):
        self.response = response

    def execute(self) -> dict:
        return self.response


class FakeCollection:
    def __init__(self, response: dict):
        self.response = response
        self.calls: list[dict] = []

    def insert(self, **kwargs) -> FakeRequest:
        self.calls.append(kwargs)
        return FakeRequest(self.response)


class FakeService:
    def __init__(self, calendar_response=None, event_response=None):
        self.calendar_collection = FakeCollection(calendar_response or {})
        self.event_collection = FakeCollection(event_response or {})
        self.closed = False

    def calendars(self) -> FakeCollection:
        return self.calendar_collection

    def events(self) -> FakeCollection:
        return self.event_collection

    def close(self) -> None:
        self.closed = True


def make_event() -> CalendarEventDescriptor:
    return CalendarEventDescriptor(
        title="解析学",
        start=TOKYO.localize(datetime.datetime(2021, 4, 12, 9, 0)),
        end=TOKYO.localize(datetime.datetime(2021, 4, 12, 12, 10)),
        recurrence="RRULE:FREQ=DAILY;INTERVAL=7;UNTIL=20210826T145959Z",
        description="時間割コード: 001\n\n",
        timeZone="Asia/Tokyo",
        courseCode="C-001",
        timetableCode="001",
    )


class TestCalendarClient(unittest.TestCase):
    def test_create_calendar(self):
        service = FakeService(calendar_response={"id": "calendar-1"})
        client = CalendarClient(service)

        calendar_id = client.create_calendar("シラバスカレンダー", "Asia/Tokyo")

        self.assertEqual(calendar_id, "calendar-1")
        self.assertEqual(
            service.calendar_collection.calls,
            [{"body": {"summary": "シラバスカレンダー", "timeZone": "Asia/Tokyo"}}],
        )

    def test_create_calendar_without_id(self):
        client = CalendarClient(FakeService(calendar_response={}))
        with self.assertRaises(RuntimeError):
            client.create_calendar("シラバスカレンダー", "Asia/Tokyo")

    def test_insert_event_sends_request_body(self):
        service = FakeService(event_response={"id": "event-1"})
        client = CalendarClient(service)
        event = make_event()

        event_id = client.insert_event("calendar-1", event)

        self.assertEqual(event_id, "event-1")
        self.assertEqual(
            service.event_collection.calls,
            [{"calendarId": "calendar-1", "body": event.to_request_body()}],
        )

    def test_insert_event_without_id(self):
        client = CalendarClient(FakeService(event_response={"status": "confirmed"}))
        with self.assertRaises(RuntimeError):
            client.insert_event("calendar-1", make_event())


class TestGoogleCalendarSession(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(google, "load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_missing_client_id(self):
        with mock.patch.dict(os.environ, {"CLIENT_SECRET": "secret"}, clear=True):
            with self.assertRaises(ValueError) as ctx:
                GoogleCalendarSession()
        self.assertIn("CLIENT_ID", str(ctx.exception))

    def test_missing_client_secret(self):
        with mock.patch.dict(os.environ, {"CLIENT_ID": "id"}, clear=True):
            with self.assertRaises(ValueError) as ctx:
                GoogleCalendarSession()
        self.assertIn("CLIENT_SECRET", str(ctx.exception))

    def test_exit_closes_service(self):
        service = FakeService(calendar_response={"id": "calendar-1"})
        env = {"CLIENT_ID": "id", "CLIENT_SECRET": "secret"}
        with mock.patch.dict(os.environ, env, clear=True):
            session = GoogleCalendarSession()

        with mock.patch.object(google, "build", return_value=service), mock.patch.object(
            GoogleCalendarSession, "_load_credentials", return_value=object()
        ):
            with session as client:
                self.assertIs(client.service, service)
                self.assertFalse(service.closed)
                self.assertEqual(client.create_calendar("x", "Asia/Tokyo"), "calendar-1")

        self.assertTrue(service.closed)
        self.assertIsNone(session.service)

    def test_client_config_carries_credentials(self):
        env = {"CLIENT_ID": "id", "CLIENT_SECRET": "secret"}
        with mock.patch.dict(os.environ, env, clear=True):
            session = GoogleCalendarSession()
        installed = session._client_config()["installed"]
        self.assertEqual(installed["client_id"], "id")
        self.assertEqual(installed["client_secret"], "secret")


if __name__ == "__main__":
    unittest.main()
