from .engines import (
    FallbackTailoringEngine,
    ModelTailoringEngine,
    TailoringEngine,
    get_tailoring_engine,
)
from .stub import StubTailoringEngine

__all__ = [
    "TailoringEngine",
    "StubTailoringEngine",
    "ModelTailoringEngine",
    "FallbackTailoringEngine",
    "get_tailoring_engine",
]
