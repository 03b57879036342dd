"""
Dependency Injection

FastAPI dependencies for routes.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from glossary.services.glossary_runtime import GlossaryRuntime
from glossary.services.navigation_controller import NavigationController
from glossary.services.session_registry import SessionRegistry


def get_runtime(request: Request) -> GlossaryRuntime:
    """Runtime created by the application lifespan"""
    return request.app.state.glossary


RuntimeDep = Annotated[GlossaryRuntime, Depends(get_runtime)]


def get_registry(runtime: RuntimeDep) -> SessionRegistry:
    """Session registry; 503 while the glossary is loading or failed"""
    return runtime.require_registry()


RegistryDep = Annotated[SessionRegistry, Depends(get_registry)]


async def get_controller(
    registry: RegistryDep,
    session_id: str = Path(..., min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.-]+$"),
) -> NavigationController:
    return await registry.get(session_id)


ControllerDep = Annotated[NavigationController, Depends(get_controller)]
