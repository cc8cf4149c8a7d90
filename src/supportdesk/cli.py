import argparse
import json
import os
import sys
from pathlib import Path

import anyio
from dotenv import load_dotenv

from .config import create_config, load_overrides
from .endpoint import TicketEndpoint
from .errors import ConfigError
from .logger import get_logger
from .schema import input_json_schema

logger = get_logger(__name__)


def _load_config(args):
    overrides = load_overrides(args.config) if args.config else None
    return create_config(overrides)


def serve(args):
    """Run the MCP server (stdio) or the HTTP form app."""
    config = _load_config(args)
    if args.transport == "http":
        import uvicorn
        from .web import create_app

        uvicorn.run(create_app(config), host=args.host, port=args.port)
    else:
        from .server import create_server, run_stdio

        anyio.run(run_stdio, create_server(config))
    return 0


def submit(args):
    """Submit one ticket from a JSON file (or stdin) and print the payload."""
    config = _load_config(args)
    try:
        raw = Path(args.input).read_text() if args.input else sys.stdin.read()
    except OSError as e:
        logger.error("❌ Cannot read ticket input: %s", e)
        return 1
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("❌ Ticket input is not valid JSON: %s", e)
        return 1
    response = TicketEndpoint(config).submit(payload)
    print(json.dumps(response.payload, indent=2))
    return 1 if response.is_error else 0


def schema(args):
    """Print the customer_support tool input schema."""
    print(json.dumps(input_json_schema(_load_config(args)), indent=2))
    return 0


def main(argv=None):
    load_dotenv(override=False)

    parser = argparse.ArgumentParser(
        prog="supportdesk", description="Support ticket MCP server"
    )
    parser.add_argument(
        "--config", "-c", default=os.getenv("SUPPORTDESK_CONFIG"),
        help="Path to YAML config overrides",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the server")
    serve_parser.add_argument(
        "--transport", choices=["stdio", "http"], default="stdio", help="MCP stdio or HTTP form app"
    )
    serve_parser.add_argument("--host", default="127.0.0.1", help="HTTP bind host")
    serve_parser.add_argument("--port", type=int, default=8000, help="HTTP bind port")
    serve_parser.set_defaults(func=serve)

    submit_parser = subparsers.add_parser("submit", help="Submit a ticket once")
    submit_parser.add_argument(
        "--input", "-i", default=None, help="Path to JSON file with ticket fields (default: stdin)"
    )
    submit_parser.set_defaults(func=submit)

    schema_parser = subparsers.add_parser("schema", help="Print the tool input schema")
    schema_parser.set_defaults(func=schema)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ConfigError as e:
        logger.error("❌ %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
