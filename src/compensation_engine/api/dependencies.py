"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from compensation_engine.calculators.engine import CompensationEngine
from compensation_engine.config import Settings, get_settings


def get_engine() -> CompensationEngine:
    """Engine dependency; the engine holds no state, so a new one is cheap."""
    return CompensationEngine()


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Engine = Annotated[CompensationEngine, Depends(get_engine)]
