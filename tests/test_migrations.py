"""
Smoke test for the Alembic revision chain.
"""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

ROOT = Path(__file__).resolve().parents[1]


def alembic_config(url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", url)
    return cfg


def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert {"firebase_users", "contacts", "chat_messages", "conversations"} <= set(inspector.get_table_names())
        unique_names = {u["name"] for u in inspector.get_unique_constraints("conversations")}
        assert "uq_conversations_user_admin" in unique_names

        command.downgrade(cfg, "base")

        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
