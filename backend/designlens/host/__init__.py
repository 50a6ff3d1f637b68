"""Host document access."""

from designlens.host.document import SceneGraph

__all__ = ["SceneGraph"]
