# cli/cli.py
"""
CLI registry and dispatcher for site API operator commands.
"""
from __future__ import annotations

import argparse
import asyncio
import inspect
import os
import sys
import traceback
from typing import Callable, Dict, Optional

import uvicorn

from cli.operations import (
    OperationResult,
    check_api_health,
    create_tables,
    list_industries,
    match_description,
    seed_industries,
)
from site_api.core.config import settings


def _supports_color() -> bool:
    """Check if terminal supports ANSI color codes."""
    if sys.platform == "win32":
        return os.getenv("TERM") == "xterm" or os.getenv("ANSICON") is not None
    return sys.stdout.isatty()


SUPPORTS_COLOR = _supports_color()

# ANSI color codes
GREEN = '\033[92m' if SUPPORTS_COLOR else ''
RED = '\033[91m' if SUPPORTS_COLOR else ''
BLUE = '\033[94m' if SUPPORTS_COLOR else ''
RESET = '\033[0m' if SUPPORTS_COLOR else ''


def print_success(message: str):
    print(f"{GREEN}[✓]{RESET} {message}")


def print_error(message: str):
    print(f"{RED}[✗]{RESET} {message}")


def print_info(message: str):
    print(f"{BLUE}[i]{RESET} {message}")


def _report(result: OperationResult) -> int:
    if result.success:
        print_success(result.message)
        return 0
    print_error(result.message)
    return 1


async def cmd_init_db(args: argparse.Namespace) -> int:
    """Command: Create database tables."""
    print_info("Creating tables...")
    result = await create_tables()
    for table in result.data.get('tables', []):
        print_info(f"  {table}")
    return _report(result)


async def cmd_seed_industries(args: argparse.Namespace) -> int:
    """Command: Insert the default industry catalogue."""
    print_info("Seeding industries...")
    result = await seed_industries()
    if result.success:
        print_info(f"  Inserted {result.data['inserted']} of {result.data['total']}")
    return _report(result)


async def cmd_list_industries(args: argparse.Namespace) -> int:
    """Command: List active industries."""
    result = await list_industries()
    exit_code = _report(result)
    for slug, name, tagline in result.data.get('industries', []):
        print(f"  {slug:<28} {name} - {tagline}")
    return exit_code


async def cmd_match(args: argparse.Namespace) -> int:
    """Command: Match a business description to an industry."""
    print_info("Matching description...")
    result = await match_description(args.description)
    exit_code = _report(result)
    if result.success:
        print_info(f"  Slug: {result.data['slug']}")
        print_info(f"  Reasoning: {result.data['reasoning']}")
        if result.data['alternates']:
            print_info(f"  Alternates: {', '.join(result.data['alternates'])}")
    elif result.data.get('code'):
        print_error(f"  Code: {result.data['code']}")
    return exit_code


async def cmd_check_api(args: argparse.Namespace) -> int:
    """Command: Check a running API's health endpoint."""
    print_info("Checking API health...")
    result = await check_api_health(api_url=args.api_url)
    for name, check in result.data.get('checks', {}).items():
        print_info(f"  {name}: {check.get('status', 'unknown')}")
    return _report(result)


def cmd_serve(args: argparse.Namespace) -> int:
    """Command: Run the API with uvicorn."""
    host = args.host or settings.api_host
    port = args.port or settings.api_port
    print_info(f"Serving site_api.main:app on {host}:{port}")
    uvicorn.run(
        "site_api.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


# Command registry
COMMANDS: Dict[str, Callable] = {
    'init-db': cmd_init_db,
    'seed-industries': cmd_seed_industries,
    'list-industries': cmd_list_industries,
    'match': cmd_match,
    'check-api': cmd_check_api,
    'serve': cmd_serve,
}


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog='site-api',
        description='Site API operator commands',
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    subparsers.add_parser('init-db', help='Create database tables')
    subparsers.add_parser('seed-industries', help='Insert the default industry catalogue')
    subparsers.add_parser('list-industries', help='List active industries')

    match_parser = subparsers.add_parser('match', help='Match a business description to an industry')
    match_parser.add_argument('description', help='Free-text business description')

    api_parser = subparsers.add_parser('check-api', help='Check a running API')
    api_parser.add_argument('--api-url', default='http://localhost:8000', help='API URL')

    serve_parser = subparsers.add_parser('serve', help='Run the API server')
    serve_parser.add_argument('--host', default=None, help='Bind address (default: API_HOST)')
    serve_parser.add_argument('--port', type=int, default=None, help='Bind port (default: API_PORT)')
    serve_parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    return parser


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    command_func = COMMANDS[parsed_args.command]

    try:
        if inspect.iscoroutinefunction(command_func):
            return asyncio.run(command_func(parsed_args))
        return command_func(parsed_args)
    except KeyboardInterrupt:
        print_error("\nInterrupted by user")
        return 130
    except Exception as e:
        print_error(f"Error executing command: {str(e)}")
        if os.getenv('DEBUG'):
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
