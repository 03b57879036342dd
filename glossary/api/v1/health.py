"""
Health check endpoint
"""

from fastapi import APIRouter

from glossary.core.deps import RuntimeDep

router = APIRouter()


@router.get("/health")
async def health_check(runtime: RuntimeDep):
    """
    Report API liveness, glossary load status and storage reachability.
    Storage being down only degrades history persistence.
    """
    storage_ok = await runtime.backend.ping()
    return {
        "api": "ok",
        "glossary": runtime.status,
        "storage": "ok" if storage_ok else "error",
    }
