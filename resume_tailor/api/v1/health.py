from fastapi import APIRouter

from resume_tailor.core.config import settings

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "healthy",
        "ai_parsing": settings.use_ai_parsing,
        "ai_tailoring": settings.use_ai_tailoring,
        "embedding_provider": settings.embedding_provider,
    }
