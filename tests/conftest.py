import pytest

from factories import FakeClient, FakeGit


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def make_client():
    return FakeClient
