import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from ..models import CalendarEventDescriptor
from .tools import TOKEN_PATH

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class CalendarClient:
    def __init__(self, service: Any):
        self.service = service
        self.logger = logging.getLogger(__name__)

    def create_calendar(self, summary: str, time_zone: str) -> str:
        self.logger.info(f"create calendar {summary!r} tz={time_zone}")
        created = (
            self.service.calendars()
            .insert(body={"summary": summary, "timeZone": time_zone})
            .execute()
        )
        calendar_id = created.get("id")
        if not calendar_id:
            raise RuntimeError(f"calendar {summary!r} was created without an id")
        self.logger.info(f"create calendar done id={calendar_id}")
        return calendar_id

    def insert_event(self, calendar_id: str, event: CalendarEventDescriptor) -> str:
        self.logger.debug(f"insert event {event.title!r} into {calendar_id}")
        created = (
            self.service.events()
            .insert(calendarId=calendar_id, body=event.to_request_body())
            .execute()
        )
        event_id = created.get("id")
        if not event_id:
            raise RuntimeError(f"event {event.title!r} was inserted without an id")
        return event_id


class GoogleCalendarSession:
    """Context manager for Google OAuth; returns a CalendarClient"""

    def __init__(self, token_path: Optional[Path] = None):
        self.token_path = Path(token_path) if token_path else TOKEN_PATH
        self.service: Any = None
        self.logger = logging.getLogger(__name__)

        load_dotenv()
        self.client_id = os.getenv("CLIENT_ID", "")
        self.client_secret = os.getenv("CLIENT_SECRET", "")
        for name, value in (
            ("CLIENT_ID", self.client_id),
            ("CLIENT_SECRET", self.client_secret),
        ):
            if value == "":
                raise ValueError(f"Missing environment variable: {name}")

    def __enter__(self) -> CalendarClient:
        credentials = self._load_credentials()
        self.service = build("calendar", "v3", credentials=credentials)
        return CalendarClient(self.service)

    def __exit__(self, exc_type, exc, tb):
        if self.service is not None:
            self.service.close()
            self.service = None

    def _client_config(self) -> dict:
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }

    def _load_credentials(self) -> Credentials:
        credentials: Optional[Credentials] = None
        if self.token_path.exists():
            credentials = Credentials.from_authorized_user_file(
                str(self.token_path), SCOPES
            )

        if credentials and credentials.valid:
            self.logger.info(f"using cached token {self.token_path}")
            return credentials

        if credentials and credentials.expired and credentials.refresh_token:
            self.logger.info("refreshing expired token")
            credentials.refresh(Request())
        else:
            self.logger.info("starting OAuth consent flow")
            flow = InstalledAppFlow.from_client_config(self._client_config(), SCOPES)
            credentials = flow.run_local_server(port=0)

        self.token_path.write_text(credentials.to_json(), encoding="utf-8")
        self.logger.info(f"token cache write {self.token_path}")
        return credentials
