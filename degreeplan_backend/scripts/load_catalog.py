"""
Load a course catalog CSV into the catalog tables.

Usage: python scripts/load_catalog.py path/to/catalog.csv

Columns: code (or course_code), title, credits, prerequisites.
"""
import sys
from pathlib import Path

from app.core.database import SessionLocal, engine
from app.models.base import Base
from app.services.catalog_import import parse_catalog_csv
from app.services.courses import bulk_upsert_courses
from app.services.prerequisites import bulk_create_prereqs

if len(sys.argv) != 2:
    sys.exit(__doc__)

content = Path(sys.argv[1]).read_text(encoding="utf-8")
courses, prereqs = parse_catalog_csv(content)

Base.metadata.create_all(bind=engine)
db = SessionLocal()
try:
    saved = bulk_upsert_courses(db, courses)
    edges = bulk_create_prereqs(db, prereqs)
finally:
    db.close()

print(f"Loaded {len(saved)} courses and {len(edges)} prerequisite edges.")
