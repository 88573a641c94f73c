#!/usr/bin/env python
"""Entry point for the Dash Volcano Explorer.

Usage
-----
    python run_app.py [--seed 42] [--n-points 1200] [--config path/to/config.json]
"""

from __future__ import annotations

import argparse

from volcano_explorer.config import load_config, setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Launch the Volcano Explorer web app")
    parser.add_argument(
        "--config", default=None,
        help="Optional JSON config with ExplorerConfig fields",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Dataset seed (default: time-based)",
    )
    parser.add_argument(
        "--n-points", type=int, default=None,
        help="Number of synthetic observations (default: 1200)",
    )
    parser.add_argument(
        "--no-annotations", action="store_true",
        help="Disable UniProt description lookups",
    )
    parser.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", type=int, default=8050,
        help="Port to serve on (default: 8050)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Run Dash in debug mode",
    )
    args = parser.parse_args()

    setup_logging(args.log_level.upper())

    config = load_config(args.config).with_overrides(
        seed=args.seed,
        n_points=args.n_points,
        annotations_enabled=False if args.no_annotations else None,
    )
    print(f"Generating {config.n_points:,} observations...")

    from volcano_explorer.app import create_app
    app = create_app(config)

    print(f"Starting Dash app on http://{args.host}:{args.port}/")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
