from .compiler import compile_course_event, compile_courses
from .registration import make_calendar

__all__ = ["compile_course_event", "compile_courses", "make_calendar"]
