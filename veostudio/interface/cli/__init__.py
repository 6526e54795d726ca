from .component import CLI

__all__ = ["CLI"]
