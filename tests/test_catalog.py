# tests/test_catalog.py
import httpx
import pytest

from coursecart.config import settings
from coursecart.services.catalog import map_course, search_courses


UPSTREAM = [
    {
        "deptCourseId": "101",
        "subjectCode": "CSCI-UA",
        "name": "Intro to Computer Science",
        "description": "Basics.",
        "sections": [
            {
                "registrationNumber": 10001,
                "code": "001",
                "instructors": ["Ada Lovelace", "Alan Turing"],
                "schedule": "M W 12:00 PM - 1:15 PM",
                "location": "CIWW 109",
                "type": "Lecture",
                "status": "Open",
                "maxUnits": 4,
                "minUnits": 4,
            },
            {"registrationNumber": 10002, "status": "WaitList"},
            {"registrationNumber": 10003, "status": "Cancelled"},
            {"code": "004"},
        ],
    },
    {"name": "no code, dropped"},
]


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_search_maps_courses_and_sections():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json=UPSTREAM)

    courses = search_courses("CSCI-UA", client=make_client(handler))

    assert seen["url"].startswith(f"{settings.CATALOG_BASE_URL}/{settings.CATALOG_TERM}")
    assert "query=CSCI-UA" in seen["url"]

    assert len(courses) == 1
    course = courses[0]
    assert course.code == "CSCI-UA 101"
    assert course.subject_code == "CSCI-UA"
    assert [s.class_number for s in course.sections] == ["10001", "10002", "10003"]

    first, wait, cancelled = course.sections
    assert first.instructor == "Ada Lovelace, Alan Turing"
    assert first.schedule == "M W 12:00 PM - 1:15 PM"
    assert first.course_type == "Lecture"
    assert first.capacity == 4
    assert wait.status == "Waitlist"
    assert wait.schedule == "TBA"
    assert wait.section == "001"
    assert cancelled.status == "Closed"


def test_map_course_defaults():
    course = map_course({"code": "MATH-UA 120", "name": "Discrete"})
    assert course.description == "No description available"
    assert course.subject_code == "MATH-UA"
    assert course.sections == []


@pytest.mark.parametrize(
    "handler",
    [
        lambda r: httpx.Response(503),
        lambda r: httpx.Response(200, text="<html>oops</html>"),
        lambda r: httpx.Response(200, json={"error": "bad term"}),
    ],
)
def test_upstream_failures_give_empty_results(handler):
    assert search_courses("CSCI-UA", client=make_client(handler)) == []


def test_transport_error_gives_empty_results(caplog):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert search_courses("CSCI-UA", client=make_client(handler)) == []
    assert "UpstreamFetchFailure" in caplog.text


def test_blank_query_does_not_call_upstream():
    def handler(request):
        raise AssertionError("should not be called")

    assert search_courses("   ", client=make_client(handler)) == []


def test_malformed_sections_field_is_absorbed():
    def handler(request):
        return httpx.Response(200, json=[
            {"deptCourseId": "101", "subjectCode": "CSCI-UA", "name": "X", "sections": 5},
            {"deptCourseId": "120", "subjectCode": "MATH-UA", "name": "Y", "sections": "10001"},
        ])

    courses = search_courses("CSCI-UA", client=make_client(handler))
    assert [c.code for c in courses] == ["CSCI-UA 101", "MATH-UA 120"]
    assert all(c.sections == [] for c in courses)


def test_unmappable_course_gives_empty_results(monkeypatch):
    from coursecart.services import catalog

    def broken(raw):
        raise TypeError("unexpected shape")

    monkeypatch.setattr(catalog, "map_course", broken)
    handler = lambda r: httpx.Response(200, json=UPSTREAM)
    assert search_courses("CSCI-UA", client=make_client(handler)) == []
