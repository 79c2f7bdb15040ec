from sqlalchemy.engine import Engine

from petconnect.db.base import Base

# Registers profiles, pets and found_reports on Base.metadata.
import petconnect.db.models  # noqa: F401


def init_db(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind)
