import argparse

from doclink.database import engine
from doclink.models.base import Base
from doclink.services.schema import ensure_runtime_schema


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create doclink tables and seed record types")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before creating them")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if args.reset:
        Base.metadata.drop_all(bind=engine)
    seeded = ensure_runtime_schema(engine)
    print(f"schema ready ({len(Base.metadata.tables)} tables, {seeded} record types added)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
