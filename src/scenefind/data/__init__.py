"""Scene data handling modules for scenefind."""

from .models import Attachment, Node, SceneInfo, node_path
from .reader import SceneReader

__all__ = ["Attachment", "Node", "SceneInfo", "SceneReader", "node_path"]
