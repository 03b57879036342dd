"""
Conftest
"""

import json
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from glossary.infra.session_storage import MemoryStorageBackend
from glossary.main import create_app
from glossary.services.glossary_loader import GlossaryLoader, parse_dataset
from glossary.services.glossary_runtime import GlossaryRuntime
from glossary.services.term_store import TermStore

# Same four terms the frontend suite uses, deliberately out of display order
FOUR_TERMS = {
    "terms": [
        {
            "id": "rest",
            "term": "REST",
            "fullForm": "Representational State Transfer",
            "definition": "An architectural style for distributed systems",
            "category": "Architecture",
            "relatedTerms": ["API", "HTTP"],
            "examples": ["RESTful API", "REST endpoints"],
        },
        {
            "id": "docker",
            "term": "Docker",
            "fullForm": None,
            "definition": "A platform for developing, shipping, and running applications in containers",
            "category": "DevOps",
            "relatedTerms": ["Kubernetes", "Container"],
            "examples": ["Docker Compose", "Dockerfile"],
        },
        {
            "id": "api",
            "term": "API",
            "fullForm": "Application Programming Interface",
            "definition": "A set of protocols for building software applications",
            "category": "Architecture",
            "relatedTerms": ["REST", "GraphQL"],
            "examples": ["REST API", "GraphQL API"],
        },
        {
            "id": "ci-cd",
            "term": "CI/CD",
            "fullForm": "Continuous Integration/Continuous Deployment",
            "definition": "Automated software development practices",
            "category": "DevOps",
            "relatedTerms": ["Jenkins", "GitHub Actions"],
            "examples": ["Automated testing", "Automated deployment"],
        },
    ],
    "categories": ["Architecture", "DevOps", "Security"],
}


@pytest.fixture
def payload() -> dict:
    return json.loads(json.dumps(FOUR_TERMS))


@pytest.fixture
def dataset(payload):
    return parse_dataset(payload)


@pytest.fixture
def store(dataset) -> TermStore:
    return TermStore(dataset)


@pytest.fixture
def backend() -> MemoryStorageBackend:
    return MemoryStorageBackend()


@pytest.fixture
def data_file(tmp_path, payload):
    path = tmp_path / "glossary.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
async def runtime(data_file, backend) -> GlossaryRuntime:
    runtime = GlossaryRuntime(backend, loader=GlossaryLoader(str(data_file)))
    await runtime.load()
    yield runtime
    runtime.close()


@pytest.fixture
async def client(runtime) -> AsyncGenerator[AsyncClient, None]:
    # The lifespan is not run by ASGITransport; install the runtime directly
    app = create_app()
    app.state.glossary = runtime

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
