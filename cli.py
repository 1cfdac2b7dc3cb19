"""CLI entry point for decap-oauth-relay.

Runs the relay with uvicorn and checks the deployment configuration.
"""
import argparse
import sys

import uvicorn

from config import Config, REQUIRED_VARS, VERSION, load_config, load_env_files
from logging_config import setup_logging
from oauth.origins import AllowedOrigins
from server import create_app, log_startup


# ============== Commands ==============

def cmd_start(config: Config, host: str = None, port: int = None,
              log_level: str = None, json_logs: bool = False) -> int:
    """Run the relay in the foreground."""
    level = (log_level or config.log_level).upper()
    setup_logging(level=level, log_format="json" if json_logs else config.log_format)
    log_startup(config)

    uvicorn.run(
        create_app(config),
        host=host or config.host,
        port=port or config.port,
        log_level=level.lower(),
    )
    return 0


def cmd_check(config: Config) -> int:
    """Show which variables are set and whether the relay can serve logins."""
    missing = config.missing()

    print("Configuration:")
    for name in REQUIRED_VARS:
        state = "missing" if name in missing else "set"
        print(f"  {name:<22} {state}")
    print(f"  {'OAUTH_HOST':<22} {config.host}")
    print(f"  {'OAUTH_PORT':<22} {config.port}")

    origins = AllowedOrigins(config.allowed_origins)
    print()
    print("Allowed origins:")
    if not origins:
        print("  (none - all cross-origin reads denied)")
    for entry in origins.entries:
        print(f"  {entry}")

    if missing:
        print(f"\nError: missing {', '.join(missing)}", file=sys.stderr)
        return 1
    return 0


def cmd_version() -> int:
    """Show version information."""
    print(f"decap-oauth-relay v{VERSION}")
    return 0


def cmd_help() -> int:
    """Show detailed help."""
    print("""
Decap CMS OAuth Relay - GitHub login for Decap CMS without a browser secret

USAGE:
    decap-oauth-relay <command> [options]

COMMANDS:
    start       Run the relay in the foreground (default)
    check       Validate configuration and show the origin allow-list
    version     Show version information
    help        Show this help message

ENVIRONMENT:
    GITHUB_CLIENT_ID       GitHub OAuth App client ID
    GITHUB_CLIENT_SECRET   GitHub OAuth App client secret
    ALLOWED_ORIGINS        Comma-separated origins, e.g. https://you.github.io
    OAUTH_HOST             Bind address (default 0.0.0.0)
    OAUTH_PORT             Port (default 8000)
    LOG_LEVEL              Log level (default INFO)
    LOG_FORMAT             plain or json (default plain)

A .env file in the working directory is read when present.
""")
    return 0


# ============== Main Entry Point ==============

def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="decap-oauth-relay",
        description="Decap CMS OAuth Relay - GitHub OAuth for Decap CMS",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="start",
        choices=["start", "check", "version", "help"],
        help="Command to run (default: start)"
    )
    parser.add_argument("--host", help="Bind address (overrides OAUTH_HOST)")
    parser.add_argument("--port", type=int, help="Port (overrides OAUTH_PORT)")
    parser.add_argument("--log-level", help="Log level (overrides LOG_LEVEL)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")

    args = parser.parse_args(argv)

    if args.command == "version":
        return cmd_version()
    if args.command == "help":
        return cmd_help()

    load_env_files()
    try:
        config = load_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "check":
        return cmd_check(config)
    return cmd_start(config, args.host, args.port, args.log_level, args.json_logs)


if __name__ == "__main__":
    sys.exit(main())
