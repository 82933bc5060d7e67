import pytest
from typing import TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from .workspace import WorkspaceFactory
    from strata.cache import CacheContext


@pytest.fixture
def workspace_factory(tmp_path: Path) -> "WorkspaceFactory":
    """Provides a factory to create isolated data trees."""
    # Lazy import so collecting tests does not import strata before coverage starts.
    from .workspace import WorkspaceFactory

    return WorkspaceFactory(tmp_path)


@pytest.fixture
def fs_context():
    """A fresh CacheContext over the real file system, disposed afterwards."""
    from strata.cache import CacheContext
    from strata.loaders import FileSystemLoader, JsonHandler, YamlHandler

    context = CacheContext(FileSystemLoader(), handlers=[JsonHandler(), YamlHandler()])
    yield context
    context.dispose()


@pytest.fixture
def isolated_default_context(monkeypatch) -> "CacheContext":
    """Replaces the process-wide default context for the duration of a test."""
    from strata.cache import CacheContext
    from strata.loaders import FileSystemLoader
    from strata.runtime import facade

    context = CacheContext(FileSystemLoader())
    monkeypatch.setattr(facade, "_default_context", context)
    return context
