from app.models.course import Course
from app.models.prerequisite import Prerequisite

__all__ = ["Course", "Prerequisite"]
