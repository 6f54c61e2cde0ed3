from sqlalchemy.orm import Session

from app.models.course import Course
from app.schemas.course import CourseCreate


def bulk_upsert_courses(db: Session, courses: list[CourseCreate]) -> list[Course]:
    by_code: dict[str, Course] = {}
    for payload in courses:
        course = by_code.get(payload.code)
        if course is None:
            course = db.query(Course).filter(Course.code == payload.code).first()
        if course is None:
            course = Course(code=payload.code)
            db.add(course)
        course.title = payload.title
        course.credits = payload.credits
        by_code[payload.code] = course
    db.commit()
    items = list(by_code.values())
    for item in items:
        db.refresh(item)
    return items
