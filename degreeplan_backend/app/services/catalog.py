import logging
import re
from collections.abc import Iterable, Mapping
from concurrent import futures
from dataclasses import dataclass, field

import requests
from sqlalchemy.orm import Session

from app.models.course import Course
from app.models.prerequisite import Prerequisite
from app.services.catalog_cache import TTLCache

logger = logging.getLogger(__name__)

DEFAULT_CREDITS = 3

# e.g. "MATH140", "CMSC 131", "CMSC216H"
_COURSE_CODE_RE = re.compile(r"[A-Z]{4}\s*\d{3}[A-Z]?")


@dataclass(frozen=True)
class CourseRecord:
    course_id: str
    name: str
    credits: int
    prerequisites: frozenset[str] = field(default_factory=frozenset)
    # informational only, placement ignores them
    corequisites: frozenset[str] = field(default_factory=frozenset)
    is_stub: bool = False


def stub_record(course_id: str, credits: int = DEFAULT_CREDITS) -> CourseRecord:
    return CourseRecord(
        course_id=course_id,
        name=course_id,
        credits=credits,
        prerequisites=frozenset(),
        is_stub=True,
    )


def parse_prerequisites(text: str | None) -> frozenset[str]:
    if not text:
        return frozenset()
    return frozenset(re.sub(r"\s+", "", m) for m in _COURSE_CODE_RE.findall(text))


class StaticCatalogResolver:
    """Resolver over an in-memory mapping of course id to record."""

    concurrent_safe = True

    def __init__(self, records: Mapping[str, CourseRecord] | Iterable[CourseRecord]):
        if isinstance(records, Mapping):
            self._records = dict(records)
        else:
            self._records = {r.course_id: r for r in records}

    def __call__(self, course_id: str) -> CourseRecord | None:
        return self._records.get(course_id)


class DatabaseCatalogResolver:
    """Resolver backed by the ``courses`` and ``prerequisites`` tables."""

    # A Session must not be shared across threads
    concurrent_safe = False

    def __init__(self, db: Session, default_credits: int = DEFAULT_CREDITS):
        self.db = db
        self.default_credits = default_credits

    def __call__(self, course_id: str) -> CourseRecord | None:
        course = self.db.query(Course).filter(Course.code == course_id).first()
        if course is None:
            return None
        rows = self.db.query(Prerequisite).filter(Prerequisite.course_code == course_id).all()
        return CourseRecord(
            course_id=course.code,
            name=course.title or course.code,
            credits=course.credits if course.credits is not None else self.default_credits,
            prerequisites=frozenset(r.prereq_code for r in rows if r.relation == "required"),
            corequisites=frozenset(r.prereq_code for r in rows if r.relation == "coreq"),
        )


class HttpCatalogResolver:
    """Resolver against a umd.io style ``GET /courses/{course_id}`` endpoint."""

    concurrent_safe = True

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 5.0,
        default_credits: int = DEFAULT_CREDITS,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.default_credits = default_credits

    def __call__(self, course_id: str) -> CourseRecord | None:
        resp = self.session.get(f"{self.base_url}/courses/{course_id}", timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        data = resp.json()
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            return None
        relationships = data.get("relationships") or {}
        return CourseRecord(
            course_id=course_id,
            name=data.get("name") or course_id,
            credits=_to_int(data.get("credits")) or self.default_credits,
            prerequisites=parse_prerequisites(relationships.get("prereqs")),
            corequisites=parse_prerequisites(relationships.get("coreqs")),
        )


class CachedCatalogResolver:
    """Read-through cache in front of another resolver. Misses are not cached."""

    def __init__(self, resolver, cache: TTLCache):
        self.resolver = resolver
        self.cache = cache
        self.concurrent_safe = getattr(resolver, "concurrent_safe", False)

    def __call__(self, course_id: str) -> CourseRecord | None:
        cached = self.cache.get(course_id)
        if cached is not None:
            logger.debug("catalog cache hit for %s", course_id)
            return cached
        logger.debug("catalog cache miss for %s", course_id)
        record = self.resolver(course_id)
        if record is not None:
            self.cache.set(course_id, record)
        return record


def resolve_many(
    resolver,
    course_ids: Iterable[str],
    max_workers: int = 8,
    timeout: float = 5.0,
    stub_credits: int = DEFAULT_CREDITS,
) -> dict[str, CourseRecord]:
    """Resolve every id, substituting a stub record for any failed lookup.

    Lookups fan out over at most ``max_workers`` threads when the resolver
    allows it; the batch as a whole waits at most ``timeout`` seconds and
    any lookup still running then becomes a stub.
    """
    unique_ids = list(dict.fromkeys(course_ids))
    records: dict[str, CourseRecord] = {}
    if not unique_ids:
        return records

    if not getattr(resolver, "concurrent_safe", False):
        for course_id in unique_ids:
            try:
                record = resolver(course_id)
            except Exception as exc:
                logger.warning("catalog lookup failed for %s: %s", course_id, exc)
                record = None
            records[course_id] = _or_stub(record, course_id, stub_credits)
        return records

    executor = futures.ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(unique_ids))))
    try:
        pending = {cid: executor.submit(resolver, cid) for cid in unique_ids}
        # one deadline for the whole batch
        futures.wait(pending.values(), timeout=timeout)
        for course_id, future in pending.items():
            if not future.done():
                logger.warning("catalog lookup timed out for %s after %.1fs", course_id, timeout)
                record = None
            elif future.exception() is not None:
                logger.warning("catalog lookup failed for %s: %s", course_id, future.exception())
                record = None
            else:
                record = future.result()
            records[course_id] = _or_stub(record, course_id, stub_credits)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
    return records


def _or_stub(record: CourseRecord | None, course_id: str, stub_credits: int) -> CourseRecord:
    if record is not None:
        return record
    logger.warning("course %s not found in catalog, using stub record", course_id)
    return stub_record(course_id, stub_credits)


def _to_int(value) -> int | None:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
