from __future__ import annotations

import unittest
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from dayglance.domain import (
    ClientInputError,
    DataAccessError,
    ProcessingError,
    RenderedSchedule,
    RenderingError,
    ScheduleItem,
    VisibleWindow,
)
from dayglance.services import ScheduleTimeline
from dayglance.services.http import app, get_schedule_service

WINDOW = VisibleWindow(480, 1080)
ITEMS = (
    ScheduleItem(title="Standup", start="09:00", end="09:15", is_external=True, location="Room 4"),
    ScheduleItem(title="Write report", start="10:00", end="11:30", is_completed=True),
)


class StubService:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.requests = []

    def render(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return RenderedSchedule(
            svg='<?xml version="1.0" encoding="UTF-8" standalone="yes"?><svg/>',
            date_ymd="2024-05-01",
            timezone=request.tz,
            window=WINDOW,
            items=ITEMS,
            generated_at=datetime(2024, 5, 1, 12, tzinfo=timezone.utc),
        )

    def build_timeline(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return ScheduleTimeline(
            user=request.user,
            date_ymd="2024-05-01",
            tz_name=request.tz,
            tz=timezone.utc,
            window=WINDOW,
            preferences=None,
            display_name="Ada",
            items=ITEMS,
        )


class HttpTestCase(unittest.TestCase):
    def use_service(self, service: StubService) -> TestClient:
        app.dependency_overrides[get_schedule_service] = lambda: service
        self.addCleanup(app.dependency_overrides.clear)
        return TestClient(app, raise_server_exceptions=False)


class TestScheduleSvgEndpoint(HttpTestCase):
    def test_svg_response_headers(self) -> None:
        client = self.use_service(StubService())
        response = client.get("/api/schedule.svg", params={"user": "u1", "date": "2024-05-01"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "image/svg+xml; charset=utf-8")
        self.assertEqual(response.headers["cache-control"], "public, max-age=60, s-maxage=300")
        self.assertEqual(response.headers["cdn-cache-control"], "public, max-age=300")
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.assertEqual(response.headers["vary"], "Accept-Encoding, Origin")
        self.assertTrue(response.text.startswith("<?xml"))

    def test_cross_origin_request_gets_one_set_of_cors_headers(self) -> None:
        client = self.use_service(StubService())
        response = client.get(
            "/api/schedule.svg",
            params={"user": "u1", "date": "2024-05-01"},
            headers={"Origin": "https://notes.example.com"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get_list("vary"), ["Accept-Encoding, Origin"])
        self.assertEqual(response.headers.get_list("access-control-allow-origin"), ["*"])

    def test_query_parameters_reach_the_service(self) -> None:
        service = StubService()
        client = self.use_service(service)
        client.get(
            "/api/schedule.svg",
            params={"user": "u1", "date": "today", "tz": "Europe/Berlin", "start": "07:00", "end": " "},
        )
        [request] = service.requests
        self.assertEqual((request.user, request.date, request.tz), ("u1", "today", "Europe/Berlin"))
        self.assertEqual(request.start, "07:00")
        self.assertIsNone(request.end)

    def test_timezone_defaults_to_utc(self) -> None:
        service = StubService()
        client = self.use_service(service)
        client.get("/api/schedule.svg", params={"user": "u1", "date": "2024-05-01"})
        self.assertEqual(service.requests[0].tz, "UTC")

    def test_errors_map_to_status_and_category(self) -> None:
        cases = [
            (ClientInputError("Missing required query parameter: user"), 400, "client_input"),
            (DataAccessError("timeout", code="57014", source="schedule from database"), 502, "upstream_data"),
            (ProcessingError("3f:ab:cd", "bad tag"), 500, "processing"),
            (RenderingError("boom"), 500, "rendering"),
        ]
        for error, status, category in cases:
            with self.subTest(category=category):
                client = self.use_service(StubService(error))
                response = client.get("/api/schedule.svg", params={"user": "u1", "date": "2024-05-01"})
                self.assertEqual(response.status_code, status)
                body = response.json()
                self.assertEqual(body["category"], category)
                self.assertEqual(body["error"], error.message)
                self.assertEqual(response.headers["access-control-allow-origin"], "*")

    def test_unexpected_errors_are_internal(self) -> None:
        client = self.use_service(StubService(RuntimeError("kaput")))
        response = client.get("/api/schedule.svg", params={"user": "u1", "date": "2024-05-01"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["category"], "internal")


class TestScheduleJsonEndpoint(HttpTestCase):
    def test_timeline_payload_uses_camel_case(self) -> None:
        client = self.use_service(StubService())
        response = client.get("/api/schedule.json", params={"user": "u1", "date": "2024-05-01"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["displayName"], "Ada")
        self.assertEqual(body["window"], {"start": "08:00", "end": "18:00", "startMinute": 480, "endMinute": 1080})
        standup, report = body["items"]
        self.assertTrue(standup["isExternal"])
        self.assertEqual(standup["color"], "#3b82f6")
        self.assertEqual(standup["location"], "Room 4")
        self.assertTrue(report["isCompleted"])
        self.assertEqual(report["color"], "#0d9488")
        self.assertEqual(response.headers["access-control-allow-origin"], "*")


class TestAuxiliaryRoutes(HttpTestCase):
    def test_options_preflight(self) -> None:
        client = self.use_service(StubService())
        for path in ("/api/schedule.svg", "/api/schedule.json"):
            with self.subTest(path=path):
                response = client.options(path)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.headers["access-control-max-age"], "86400")
                self.assertEqual(response.headers["access-control-allow-methods"], "GET, OPTIONS")

    def test_browser_preflight_is_answered_by_the_route(self) -> None:
        client = self.use_service(StubService())
        response = client.options(
            "/api/schedule.svg",
            headers={"Origin": "https://notes.example.com", "Access-Control-Request-Method": "GET"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get_list("access-control-allow-origin"), ["*"])
        self.assertEqual(response.headers["access-control-allow-headers"], "Content-Type")

    def test_health(self) -> None:
        client = self.use_service(StubService())
        self.assertEqual(client.get("/healthz").json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
