"""FastAPI dependency factories."""

from functools import lru_cache

from fastapi import Depends

from competition.config import Settings
from competition.question_bank import QuestionBank
from server.runtime import Runtime

# Process-wide Runtime cache (keyed by settings identity for override support)
_runtime: Runtime | None = None
_runtime_settings_id: object | None = None


@lru_cache()
def get_settings() -> Settings:
    """Singleton Settings -- override via app.dependency_overrides in tests."""
    return Settings()


def get_runtime(settings: Settings = Depends(get_settings)) -> Runtime:
    """Process-wide Runtime; rebuilt if settings were overridden (e.g. in tests)."""
    global _runtime, _runtime_settings_id
    if _runtime is None or _runtime_settings_id is not settings:
        _runtime = Runtime(settings)
        _runtime_settings_id = settings
    return _runtime


def get_question_bank(runtime: Runtime = Depends(get_runtime)) -> QuestionBank:
    """Cached QuestionBank from Runtime (process-wide)."""
    return runtime.get_bank()
