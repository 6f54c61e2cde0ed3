from sqlalchemy.orm import Session

from app.models.prerequisite import Prerequisite
from app.schemas.prerequisite import PrerequisiteCreate


def bulk_create_prereqs(
    db: Session, prereqs: list[PrerequisiteCreate]
) -> list[Prerequisite]:
    items: list[Prerequisite] = []
    seen: set[tuple[str, str, str]] = set()
    for item in prereqs:
        key = (item.course_code, item.prereq_code, item.relation)
        if key in seen:
            continue
        seen.add(key)
        existing = (
            db.query(Prerequisite)
            .filter(
                Prerequisite.course_code == item.course_code,
                Prerequisite.prereq_code == item.prereq_code,
                Prerequisite.relation == item.relation,
            )
            .first()
        )
        if existing is not None:
            items.append(existing)
            continue
        row = Prerequisite(**item.model_dump())
        db.add(row)
        items.append(row)
    db.commit()
    for item in items:
        db.refresh(item)
    return items
