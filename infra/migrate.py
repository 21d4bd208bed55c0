import logging
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from infra.path import APP_NAME

logger = logging.getLogger(__name__)


def _app_dir() -> Path:
    """
    Directory the running app lives in: the PyInstaller extraction dir or
    exe folder when frozen, the project root in development.
    """
    if getattr(sys, "frozen", False):
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass).resolve()
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def find_migration_dir() -> Path:
    app_dir = _app_dir()
    candidates = [
        app_dir / "migration",
        app_dir / "_internal" / "migration",
        app_dir / APP_NAME / "migration",
    ]
    for candidate in candidates:
        if (candidate / "env.py").exists():
            return candidate
    raise RuntimeError(
        "Alembic script_location missing. Tried: " + ", ".join(str(p) for p in candidates)
    )


def run_migrations(db_url: str) -> None:
    script_location = find_migration_dir()
    alembic_ini = script_location / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic config missing: {alembic_ini}")

    cfg = Config(str(alembic_ini))
    cfg.set_main_option("script_location", str(script_location))
    cfg.set_main_option("sqlalchemy.url", db_url)
    logger.info("Upgrading schema at %s", db_url)
    command.upgrade(cfg, "head")
