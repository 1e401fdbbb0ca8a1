"""
Upstream catalog feed.

GET {CATALOG_BASE_URL}/{CATALOG_TERM}?query=<term> -> list of courses with nested sections.
The feed is read-only and untrusted: anything unexpected degrades to "no courses found".
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from coursecart.config import settings
from coursecart.errors import ErrorCode
from coursecart.schemas.catalog import CatalogCourse, CatalogSection

logger = logging.getLogger("coursecart.catalog")


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    s = str(value).strip()
    return s or default


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _status(raw: Any) -> str:
    s = _text(raw, "Open").lower()
    if "wait" in s:
        return "Waitlist"
    if s in ("closed", "cancelled", "canceled"):
        return "Closed"
    return "Open"


def _instructor(raw: Dict[str, Any]) -> str:
    if raw.get("instructor"):
        return _text(raw["instructor"], "TBA")
    names = raw.get("instructors") or []
    if isinstance(names, list) and names:
        return ", ".join(str(n) for n in names)
    return "TBA"


def _course_code(raw: Dict[str, Any]) -> Optional[str]:
    code = _text(raw.get("code") or raw.get("deptCourseId"), "")
    if not code:
        return None
    subject = _text(raw.get("subjectCode"), "")
    # "101" + "CSCI-UA" -> "CSCI-UA 101"
    if " " not in code and subject:
        code = f"{subject} {code}"
    return code


def map_section(raw: Dict[str, Any]) -> Optional[CatalogSection]:
    class_number = _text(raw.get("registrationNumber") or raw.get("classNumber"), "")
    if not class_number:
        return None
    return CatalogSection(
        class_number=class_number,
        section=_text(raw.get("code") or raw.get("section"), "001"),
        instructor=_instructor(raw),
        schedule=_text(raw.get("schedule"), "TBA"),
        location=_text(raw.get("location"), "TBA"),
        course_type=_text(raw.get("type") or raw.get("courseType"), "In-Person"),
        status=_status(raw.get("status")),
        capacity=_int(raw.get("maxUnits") or raw.get("capacity")),
        enrolled=_int(raw.get("minUnits") or raw.get("enrolled")),
    )


def map_course(raw: Dict[str, Any]) -> Optional[CatalogCourse]:
    code = _course_code(raw)
    if not code:
        return None
    raw_sections = raw.get("sections") or []
    if not isinstance(raw_sections, list):
        logger.warning("%s: course %s has malformed sections %r", ErrorCode.UPSTREAM_FETCH_FAILURE.value, code, raw_sections)
        raw_sections = []
    sections = [s for s in (map_section(r) for r in raw_sections if isinstance(r, dict)) if s]
    subject = _text(raw.get("subjectCode"), "") or code.split(" ")[0]
    return CatalogCourse(
        code=code,
        name=_text(raw.get("name"), code),
        description=_text(raw.get("description"), "No description available"),
        subject_code=subject,
        sections=sections,
    )


def search_courses(term: str, client: Optional[httpx.Client] = None) -> List[CatalogCourse]:
    term = (term or "").strip()
    if not term:
        return []

    url = f"{settings.CATALOG_BASE_URL.rstrip('/')}/{settings.CATALOG_TERM}"
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=settings.CATALOG_TIMEOUT_SECONDS)

    try:
        logger.info("Fetching: %s?query=%s", url, term)
        resp = client.get(url, params={"query": term})
        resp.raise_for_status()
        payload = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("%s: %s (%s)", ErrorCode.UPSTREAM_FETCH_FAILURE.value, url, e)
        return []
    finally:
        if owns_client:
            client.close()

    if not isinstance(payload, list):
        logger.warning("%s: unexpected payload type %s", ErrorCode.UPSTREAM_FETCH_FAILURE.value, type(payload).__name__)
        return []

    try:
        courses = [c for c in (map_course(r) for r in payload if isinstance(r, dict)) if c]
    except (TypeError, ValueError) as e:
        logger.warning("%s: unmappable payload (%s)", ErrorCode.UPSTREAM_FETCH_FAILURE.value, e)
        return []
    logger.info("catalog search %r -> %d course(s)", term, len(courses))
    return courses
