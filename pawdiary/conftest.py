# pawdiary/conftest.py
"""
공통 pytest fixture

사용법: python -m pytest pawdiary -v
"""
import pytest

from pawdiary import create_app
from pawdiary.services.document_store import InMemoryDocumentStore


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def activity_doc_store():
    return InMemoryDocumentStore()


@pytest.fixture
def app(store, activity_doc_store):
    return create_app('testing', store=store, activity_store=activity_doc_store)


@pytest.fixture
def client(app):
    return app.test_client()
