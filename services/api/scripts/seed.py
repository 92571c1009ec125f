#!/usr/bin/env python3
"""Generate the business record store offline.

Writes a fresh JSON collection of synthetic businesses, or appends to the
existing one with --append.

Usage:
    cd services/api
    python -m scripts.seed
    python -m scripts.seed --count 50000 --append
    DATA_FILE=/tmp/dados.json python -m scripts.seed

Optional env vars:
    DATA_FILE=dados_comercios.json
    SEED=42   (reproducible output)
"""

import argparse
import logging
import os
import random
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from comercios.services.generator import append_generated, generate_businesses  # noqa: E402
from comercios.settings import get_settings  # noqa: E402
from comercios.stores.records import RecordStore, StoreError  # noqa: E402

load_dotenv()

logger = logging.getLogger("uvicorn.error")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate synthetic business records")
    parser.add_argument("--count", type=int, default=10_000, help="records to generate")
    parser.add_argument("--append", action="store_true", help="append to the existing store")
    parser.add_argument("--output", default=None, help="store path (default: DATA_FILE)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    store = RecordStore(args.output or get_settings().data_file)
    seed = os.getenv("SEED")
    rng = random.Random(int(seed)) if seed else random.Random()

    try:
        if args.append:
            total = append_generated(store, args.count, rng=rng)
        else:
            store.save(generate_businesses(1, args.count, rng=rng))
            total = args.count
    except StoreError as e:
        logger.error(f"Seed failed: {e}")
        return 1

    print(f"{store.path}: {total} records")
    return 0


if __name__ == "__main__":
    sys.exit(main())
