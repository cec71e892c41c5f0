"""Record models shared by the registry, evaluator and loader."""

from .models import DependencyRecord, DeprecationRecord, Record, Tier

__all__ = ["DependencyRecord", "DeprecationRecord", "Record", "Tier"]
