from .loaders import CountingLoader, GatedLoader
from .workspace import WorkspaceFactory

__all__ = ["CountingLoader", "GatedLoader", "WorkspaceFactory"]
