from .registry import LinkRegistry

__all__ = ["LinkRegistry"]
