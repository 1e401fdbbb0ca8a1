# coursecart/errors.py
from enum import Enum


class ErrorCode(str, Enum):
    PARSE_ANOMALY = "ParseAnomaly"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    DUPLICATE_COURSE = "DuplicateCourse"
    ALREADY_ENROLLED = "AlreadyEnrolled"
    SECTION_CLOSED = "SectionClosed"
    TIME_CONFLICT = "TimeConflict"
    EMPTY_CART = "EmptyCart"
    UNKNOWN_SESSION = "UnknownSession"
    CART_UPDATE_FAILED = "CartUpdateFailed"
    ENROLLMENT_FAILED = "EnrollmentFailed"
    UPSTREAM_FETCH_FAILURE = "UpstreamFetchFailure"
