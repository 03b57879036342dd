"""
Browsing session endpoints

Each request is one UI event: search text changed, category selected,
related term or breadcrumb item activated, clear history requested.
"""

from fastapi import APIRouter

from glossary.core.deps import ControllerDep
from glossary.schemas.session import (
    CategorySelect,
    NavigateRequest,
    NavigateResponse,
    SearchUpdate,
    SessionView,
)

router = APIRouter()


@router.get("/{session_id}", response_model=SessionView, response_model_by_alias=True)
async def get_session_view(controller: ControllerDep):
    return controller.snapshot()


@router.put("/{session_id}/search", response_model=SessionView, response_model_by_alias=True)
async def update_search(body: SearchUpdate, controller: ControllerDep):
    controller.set_search_query(body.query)
    return controller.snapshot()


@router.put("/{session_id}/category", response_model=SessionView, response_model_by_alias=True)
async def select_category(body: CategorySelect, controller: ControllerDep):
    controller.select_category(body.category)
    return controller.snapshot()


@router.post("/{session_id}/navigate", response_model=NavigateResponse, response_model_by_alias=True)
async def navigate(body: NavigateRequest, controller: ControllerDep):
    """
    Navigate to a term. Unknown IDs are not an error: the response reports
    `navigated: false` and nothing changes.
    """
    navigated = await controller.navigate_to(body.term_id, body.from_history)
    return NavigateResponse(navigated=navigated, term_id=body.term_id)


@router.delete("/{session_id}/history", response_model=SessionView, response_model_by_alias=True)
async def clear_history(controller: ControllerDep):
    await controller.clear_history()
    return controller.snapshot()
