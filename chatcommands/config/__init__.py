from .settings import ChatCommandSettings, settings

__all__ = ["ChatCommandSettings", "settings"]
