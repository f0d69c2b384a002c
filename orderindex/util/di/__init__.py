from orderindex.util.di.base import Provider
from orderindex.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
