"""
Glossary Runtime

Application-wide load state: loading -> ready | failed. Nothing that needs
the term store is reachable until the dataset has loaded.
"""

from typing import Literal, Optional, Tuple

from glossary.core.errors import AppError, DataFormatError, DataLoadError, ServiceUnavailableError
from glossary.core.logging import get_logger
from glossary.infra.session_storage import StorageBackend
from glossary.schemas.glossary import GlossaryStatus
from glossary.services.glossary_loader import GlossaryLoader
from glossary.services.presentation import category_options
from glossary.services.session_registry import SessionRegistry
from glossary.services.term_store import TermStore
from glossary.ws.manager import ConnectionManager

logger = get_logger(__name__)

RuntimeStatus = Literal["loading", "ready", "failed"]


class GlossaryRuntime:
    def __init__(
        self,
        backend: StorageBackend,
        loader: Optional[GlossaryLoader] = None,
        manager: Optional[ConnectionManager] = None,
    ):
        self.backend = backend
        self.loader = loader or GlossaryLoader()
        self.manager = manager or ConnectionManager()
        self.status: RuntimeStatus = "loading"
        self.error: Optional[AppError] = None
        self.store: Optional[TermStore] = None
        self.registry: Optional[SessionRegistry] = None

    @property
    def is_ready(self) -> bool:
        return self.status == "ready"

    async def load(self) -> bool:
        """
        Load (or reload) the dataset.
        Returns False and records the error if loading failed; never raises
        for data problems.
        """
        self.status = "loading"
        self.error = None
        try:
            dataset = await self.loader.load()
        except (DataLoadError, DataFormatError) as e:
            logger.error(f"Glossary Error: {e.message}")
            self.status = "failed"
            self.error = e
            return False

        if self.registry is not None:
            self.registry.close()
        self.store = TermStore(dataset)
        self.registry = SessionRegistry(self.store, self.backend, self.manager)
        self.status = "ready"
        return True

    def require_registry(self) -> SessionRegistry:
        if self.status != "ready" or self.registry is None:
            details = {"status": self.status, "retry": "POST /glossary/reload"}
            if self.error is not None:
                details["error_code"] = self.error.code
            message = (
                f"Error Loading Glossary: {self.error.message}"
                if self.error is not None
                else "Glossary is still loading"
            )
            raise ServiceUnavailableError(message, details=details)
        return self.registry

    def status_view(self) -> GlossaryStatus:
        return GlossaryStatus(
            status=self.status,
            source=self.loader.source,
            message=self.error.message if self.error is not None else None,
            error_code=self.error.code if self.error is not None else None,
            categories=category_options(self.store) if self.store is not None else [],
            total_count=len(self.store) if self.store is not None else 0,
        )

    def sweep_expired(self) -> Tuple[int, int]:
        """Drop idle sessions and expired storage entries. Returns both counts."""
        sessions = self.registry.sweep_expired() if self.registry is not None else 0
        return sessions, self.backend.sweep_expired()

    def close(self) -> None:
        if self.registry is not None:
            self.registry.close()
