"""YourOwnBoss backend package wiring and entrypoints."""

from yourownboss_backend.main import create_app, run_dev, run_prod, run_seed
from yourownboss_backend.settings import BackendSettings, get_settings

main = run_dev

__all__ = [
    "BackendSettings",
    "create_app",
    "get_settings",
    "main",
    "run_dev",
    "run_prod",
    "run_seed",
]
