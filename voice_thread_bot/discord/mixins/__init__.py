from .events_mixin import EventsMixin
from .lifecycle_mixin import ThreadLifecycleMixin
from .rename_mixin import RenameWorkflowMixin

__all__ = [
    "EventsMixin",
    "RenameWorkflowMixin",
    "ThreadLifecycleMixin",
]
