import argparse
import asyncio
import logging

from backend.app.db.base import engine
from backend.app.db.init_db import init_models


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Filehold tables.")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="drop existing tables first (development only)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_models(engine, drop=args.drop))


if __name__ == "__main__":
    main()
