"""Shared fixtures for editor unit tests"""

import pytest

from mdblocks.crud.memory_repo import MemoryPreferenceRepo
from mdblocks.crud.preferences import StructuredDataPreference
from mdblocks.editor.lifecycle import sequential_ids
from mdblocks.editor.session import EditorSession


@pytest.fixture(name="repo")
def repo_fixture():
    return MemoryPreferenceRepo()


@pytest.fixture(name="preference")
def preference_fixture(repo):
    return StructuredDataPreference(repo)


@pytest.fixture(name="session")
def session_fixture(preference):
    """Editor session with deterministic `cb-N` ids and an in-memory preference."""
    s = EditorSession(preference=preference, id_factory=sequential_ids())
    yield s
    s.close()
