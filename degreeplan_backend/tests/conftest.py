import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models.base import Base
from app.services.catalog import CourseRecord, StaticCatalogResolver


# A slice of the UMD computer science catalog: (credits, prerequisites)
UMD_COURSES = {
    "CMSC131": (4, ()),
    "CMSC132": (4, ("CMSC131",)),
    "CMSC216": (4, ("CMSC132",)),
    "CMSC250": (4, ("CMSC131", "MATH140")),
    "CMSC330": (3, ("CMSC216", "CMSC250")),
    "CMSC351": (3, ("CMSC216", "CMSC250")),
    "MATH140": (4, ()),
    "MATH141": (4, ("MATH140",)),
    "STAT400": (3, ("MATH141",)),
    "ENGL101": (3, ()),
}


@pytest.fixture
def umd_records():
    return {
        code: CourseRecord(
            course_id=code,
            name=f"{code} title",
            credits=credits,
            prerequisites=frozenset(prereqs),
        )
        for code, (credits, prereqs) in UMD_COURSES.items()
    }


@pytest.fixture
def umd_resolver(umd_records):
    return StaticCatalogResolver(umd_records)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
