# scripts/init_db.py
"""
Create any missing tables in DATABASE_URL.

Pass --reset to drop every table first.
"""

import sys

from boxmfg.db.engine import get_engine
from boxmfg.db.schema import metadata


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    engine = get_engine()
    if "--reset" in argv:
        metadata.drop_all(engine)
    metadata.create_all(engine)
    print("DB schema created.")


if __name__ == "__main__":
    main()
