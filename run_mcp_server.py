"""
Serve the form engine tools over MCP.

    python run_mcp_server.py                      # stdio
    python run_mcp_server.py --transport sse      # HTTP, /sse and /health
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from form_engine.config import FormEngineConfig, get_config
from form_engine.mcp_server import run_mcp_server

ENVIRONMENT_HELP = """
Settings are read from the environment (or a .env file):
  MCP_TRANSPORT, MCP_PORT, FORM_ENGINE_LOG_LEVEL,
  FORM_ENGINE_STRICT_COMPILE, FORM_ENGINE_ENABLE_TRACING
"""


def build_parser(config: FormEngineConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate, describe and mount declarative forms over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=ENVIRONMENT_HELP,
    )
    parser.add_argument("--transport", choices=["stdio", "sse"], default=config.mcp_transport)
    parser.add_argument("--host", default="0.0.0.0", help="SSE bind address")
    parser.add_argument("--port", type=int, default=config.mcp_port, help="SSE port")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=config.strict_compile,
        help="Reject form configs with diagnostics instead of ignoring bad rules",
    )
    return parser


def main():
    config = get_config()
    args = build_parser(config).parse_args()
    config.strict_compile = args.strict

    # stdout carries the protocol in stdio mode
    where = f" on {args.host}:{args.port}" if args.transport == "sse" else ""
    print(
        f"form-engine MCP server: {args.transport}{where}, strict={config.strict_compile}",
        file=sys.stderr,
    )

    try:
        asyncio.run(run_mcp_server(transport=args.transport, host=args.host, port=args.port))
    except KeyboardInterrupt:
        print("Server stopped.", file=sys.stderr)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
