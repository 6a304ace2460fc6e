from app.configs.settings import (
    CONFIG_MAP,
    HasherConfig,
    Settings,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "HasherConfig",
    "Settings",
    "settings",
]
