# grenadeflag/server/__main__.py
"""Entry point: python -m grenadeflag.server"""

from __future__ import annotations

import argparse

import uvicorn

from .config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Grenade Flag Harness")
    parser.add_argument("--host", type=str, default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--seed", type=int, default=settings.SEED, help="Seed for the accuracy perturbation RNG")
    args = parser.parse_args()

    settings.SEED = args.seed

    from . import create_app

    app = create_app()
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
