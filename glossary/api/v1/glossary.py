"""
Glossary dataset endpoints
"""

from fastapi import APIRouter, status

from glossary.core.deps import RegistryDep, RuntimeDep
from glossary.schemas.glossary import GlossaryStatus, TermCard
from glossary.services.presentation import render_term_card

router = APIRouter()


@router.get("", response_model=GlossaryStatus, response_model_by_alias=True)
async def get_glossary_status(runtime: RuntimeDep):
    """Load status, category filter options and total term count"""
    return runtime.status_view()


@router.post(
    "/reload",
    response_model=GlossaryStatus,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Reload the glossary dataset",
)
async def reload_glossary(runtime: RuntimeDep):
    """
    Retry action for a failed load. Existing sessions are dropped and
    rebuilt from session storage on next access.
    """
    await runtime.load()
    return runtime.status_view()


@router.get("/terms/{term_id}", response_model=TermCard, response_model_by_alias=True)
async def get_term(term_id: str, registry: RegistryDep):
    """Single term card; 404 when the ID is unknown"""
    term = registry.store.require(term_id)
    return render_term_card(term, registry.store)
