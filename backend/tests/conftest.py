"""
Point the settings at a throwaway sqlite file and create the schema before
any test module imports the app. Set DB_URL yourself to run against Postgres.
"""
import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="gymtracker-tests-")
os.environ.setdefault("DB_URL", f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}")

from gymtracker.db import Base, engine  # noqa: E402
from gymtracker import models  # noqa: E402,F401

Base.metadata.create_all(bind=engine)
