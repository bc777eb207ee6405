"""Apply, roll back or generate TeleCare schema migrations.

Usage:
    python scripts/migrate.py                    # upgrade to head
    python scripts/migrate.py down [revision]    # downgrade (default: one step)
    python scripts/migrate.py create <message>   # autogenerate a revision
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def _config() -> Config:
    return Config(str(ALEMBIC_INI))


def upgrade(revision: str = "head") -> None:
    """Upgrade the schema to ``revision``."""
    print(f"Upgrading schema to {revision}...")
    command.upgrade(_config(), revision)
    print("✓ Schema is up to date")


def downgrade(revision: str = "-1") -> None:
    """Downgrade the schema to ``revision``."""
    print(f"Downgrading schema to {revision}...")
    command.downgrade(_config(), revision)
    print("✓ Downgrade complete")


def create(message: str) -> None:
    """Autogenerate a revision from the table metadata."""
    print(f"Creating migration: {message}")
    command.revision(_config(), message=message, autogenerate=True)
    print("✓ Migration created")


def main(argv: list[str]) -> int:
    """Dispatch the command line."""
    try:
        if not argv:
            upgrade()
        elif argv[0] == "down":
            downgrade(argv[1] if len(argv) > 1 else "-1")
        elif argv[0] == "create" and len(argv) > 1:
            create(" ".join(argv[1:]))
        else:
            print(__doc__)
            return 2
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
