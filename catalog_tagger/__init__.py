"""Fill in album metadata of a track from an online album catalog."""

from .config import Options
from .reconcile import TagReconciler, reconcile
from .types import Candidate, CatalogRequest, CatalogResponse, TrackRecord

__version__ = "0.1.0"

__all__ = [
    "Candidate",
    "CatalogRequest",
    "CatalogResponse",
    "Options",
    "TagReconciler",
    "TrackRecord",
    "reconcile",
]
