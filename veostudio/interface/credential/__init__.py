from .component import Credential

__all__ = ["Credential"]
