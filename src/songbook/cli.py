"""
Command-line entry point for Songbook.

Loads configuration, sets up logging and runs the FastAPI backend under uvicorn.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .core.config import Config, create_default_config, get_config_path, load_config
from .core.output import setup_loguru


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="songbook",
        description="songbook: upload songs and keep favorites",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to TOML config file (default: {get_config_path()})",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP backend")
    serve.add_argument("--host", default=None, help="Interface to bind")
    serve.add_argument("--port", type=int, default=None, help="Port to listen on")
    serve.add_argument("--library-dir", default=None, help="Directory holding uploaded songs")
    serve.add_argument(
        "--reload", action="store_true", default=None, help="Reload on code changes (development)"
    )

    init = subparsers.add_parser("init-config", help="Print or write the default config")
    init.add_argument("--output", default=None, help="Write to this path instead of stdout")
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    return parser


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    """CLI flags override config values (only when explicitly provided)."""
    if args.host is not None:
        config.web.host = args.host
    if args.port is not None:
        config.web.port = args.port
    if args.library_dir is not None:
        config.storage.library_dir = args.library_dir
    if args.reload is not None:
        config.web.reload = args.reload
    return config


def serve(config: Config, config_path: Optional[Path]) -> None:
    import uvicorn

    setup_loguru(config.logging)
    logger.info(f"Starting Songbook on {config.web.host}:{config.web.port}")

    if config.web.reload:
        # The reloader re-imports the app in a fresh process; hand it our settings via env
        if config_path is not None:
            os.environ["SONGBOOK_CONFIG"] = str(config_path)
        os.environ["SONGBOOK_LIBRARY_DIR"] = config.storage.library_dir
        uvicorn.run(
            "web.backend.main:app",
            host=config.web.host,
            port=config.web.port,
            reload=True,
        )
        return

    from web.backend.main import create_app

    uvicorn.run(create_app(config), host=config.web.host, port=config.web.port)


def init_config(output: Optional[str], force: bool) -> int:
    content = create_default_config() + "\n"
    if output is None:
        sys.stdout.write(content)
        return 0

    path = Path(output).expanduser()
    if path.exists() and not force:
        print(f"Refusing to overwrite {path} (use --force)", file=sys.stderr)
        return 1

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    print(f"Wrote default config to {path}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init-config":
        return init_config(args.output, args.force)

    if args.command != "serve":
        parser.print_help()
        return 1

    config_path = Path(args.config).expanduser() if args.config else None
    try:
        config = load_config(config_path)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    serve(apply_cli_overrides(config, args), config_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
