from proconnect.config.settings import settings

__all__ = ["settings"]
