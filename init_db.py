"""
Script to initialize the snapshot database by creating the
t_options_cboe_snapshot table and its indexes.

Run from the project root, e.g.:
    python init_db.py apply
    python init_db.py status
    python init_db.py ddl --output migrations/create_options_snapshot.sql
"""

import sys

from cboe_options_snapshot.storage.init_db import main

if __name__ == "__main__":
    sys.exit(main())
