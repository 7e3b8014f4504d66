"""Seed the handicap-tier baseline table from JSON.
    python3 data/load_baselines.py                      # data/handicap_baselines.json
    python3 data/load_baselines.py path/to/baselines.json
"""

import asyncio
import os
import sys

from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analytics.baselines import load_baseline_table
from database.connection import DatabasePool
from database.db_manager import DatabaseManager

DEFAULT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "handicap_baselines.json")


async def load_baselines(path: str, dsn: str = None) -> int:
    table = load_baseline_table(path)
    print(f"Loaded {len(table)} baseline anchors from {path}")

    pool = DatabasePool()
    await pool.initialize(dsn=dsn)
    try:
        db = DatabaseManager(pool.pool)
        written = await db.baselines.replace_baseline_table(table)
        for row in table:
            print(f"  hcp {row.handicap:+5.1f}: score {row.score:5.1f}  FIR {row.fir_pct:4.1f}%  "
                  f"GIR {row.gir_pct:4.1f}%  putts {row.putts:4.1f}  penalties {row.penalties:4.1f}")
        print(f"\nDone: {written} anchors written")
        return written
    finally:
        await pool.close()


def main():
    load_dotenv()
    path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_PATH
    asyncio.run(load_baselines(path, os.environ.get("DATABASE_URL")))


if __name__ == "__main__":
    main()
