"""Route handlers for Web API."""

from studydebt.web.routes.assignments import router as assignments_router
from studydebt.web.routes.chapters import router as chapters_router
from studydebt.web.routes.debt import router as debt_router
from studydebt.web.routes.health import router as health_router
from studydebt.web.routes.lectures import router as lectures_router
from studydebt.web.routes.questions import router as questions_router
from studydebt.web.routes.subtasks import router as subtasks_router

__all__ = [
    "assignments_router",
    "chapters_router",
    "debt_router",
    "health_router",
    "lectures_router",
    "questions_router",
    "subtasks_router",
]
