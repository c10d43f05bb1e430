#!/usr/bin/env python3
"""
Elite AI Agent - Main Entry Point
=================================

This is the main entry point for the Elite AI Agent.
It provides a command-line interface for running the agent
in various modes.

Usage:
    python main.py --web              # Start web UI
    python main.py --tui              # Start terminal UI
    python main.py --ask "hello"      # Answer one message
    python main.py --tools            # List available tools
    python main.py --status           # Show configuration
    python main.py --setup            # Write default configuration
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import load_config, create_default_config, Config
from core.logging import setup_logging, get_logger
from core.exceptions import AgentError

logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Elite AI Agent - rule-based multi-tool chat agent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --web                        Start web UI on default port
  python main.py --web --port 9000            Start web UI on port 9000
  python main.py --tui                        Start terminal UI
  python main.py --ask "calculate 10 + 5"     Answer one message
  python main.py --tools                      List available tools
  python main.py --setup                      Write default configuration
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--web",
        action="store_true",
        help="Start web UI server"
    )
    mode_group.add_argument(
        "--tui",
        action="store_true",
        help="Start terminal UI"
    )
    mode_group.add_argument(
        "--ask",
        type=str,
        metavar="MESSAGE",
        help="Answer a single message and print the reply"
    )
    mode_group.add_argument(
        "--tools",
        action="store_true",
        help="List available tools"
    )
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show configuration status"
    )
    mode_group.add_argument(
        "--setup",
        action="store_true",
        help="Write a default configuration file"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for web UI (default: from config, 8080)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host for web UI (default: from config, 127.0.0.1)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )

    return parser.parse_args(argv)


def check_dependencies(web: bool = False, tui: bool = False) -> bool:
    """
    Check that the libraries needed by the chosen mode are installed.

    Returns:
        True if all dependencies are available
    """
    missing = []

    try:
        import yaml  # noqa: F401
    except ImportError:
        missing.append("pyyaml")

    if web:
        for module, package in (("fastapi", "fastapi"), ("uvicorn", "uvicorn"), ("jinja2", "jinja2")):
            try:
                __import__(module)
            except ImportError:
                missing.append(package)

    if tui:
        try:
            import textual  # noqa: F401
        except ImportError:
            missing.append("textual")

    if missing:
        print(f"Missing dependencies: {', '.join(missing)}")
        print("Install with: pip install " + " ".join(missing))
        return False

    return True


def run_setup(config_path: Optional[str] = None) -> None:
    """Write a default configuration file."""
    config = create_default_config(config_path=config_path)

    written = config_path or str(Path(config.config_dir) / "config.yaml")
    print(f"\n✓ Created default configuration at {written}")
    print("\nTo start the agent:")
    print("  Web UI:    python main.py --web")
    print("  Terminal:  python main.py --tui")
    print("  Help:      python main.py --help")


def run_status_check(config: Config) -> None:
    """Display configuration status."""
    from services.chat_service import ChatService

    service = ChatService(config=config)
    rules = service.describe_rules()

    print("\n" + "=" * 50)
    print(f"{config.app_name} - Status")
    print("=" * 50 + "\n")

    print("Configuration")
    print("-" * 30)
    print(f"  Version: {config.version}")
    print(f"  Config dir: {config.config_dir}")
    print(f"  Log dir: {config.log_dir or 'console only'}")
    print(f"  Templates: {config.chat.templates_file or 'built-in'}")

    print("\nRules")
    print("-" * 30)
    print(f"  Tool selection rules: {len(rules['selection'])}")
    print(f"  Response rules: {len(rules['response'])}")

    print("\nWeb UI")
    print("-" * 30)
    print(f"  Address: http://{config.ui.web_host}:{config.ui.web_port}")

    print("\n" + "=" * 50 + "\n")


def run_list_tools(config: Config) -> None:
    """Print the available tools."""
    from services.chat_service import ChatService

    print("\nAvailable tools:")
    for tool in ChatService(config=config).describe_tools():
        print(f"  {tool['icon']}  {tool['name']:<16} {tool['description']}")
    print()


def run_ask(config: Config, message: str) -> None:
    """Answer one message and print the reply with its tool calls."""
    from services.chat_service import ChatService

    result = ChatService(config=config).ask(message)

    for invocation in result.tool_invocations:
        print(f"🔧 Using: {invocation.name.value}")
        if invocation.result:
            print(f"   {invocation.result}")

    if result.tool_invocations:
        print()
    print(result.content)


def run_web_ui(config: Config, host: str, port: int, debug: bool) -> None:
    """Run the web UI server."""
    from ui.web.app import run_app

    print(f"\nStarting Web UI on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")

    run_app(host=host, port=port, debug=debug, config=config)


def run_terminal_ui(config: Config) -> None:
    """Run the terminal UI."""
    from ui.terminal.app import run_tui

    run_tui(config=config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if not check_dependencies(web=args.web, tui=args.tui):
        return 1

    try:
        if args.setup:
            run_setup(args.config)
            return 0

        config = load_config(args.config)

        if args.debug:
            config.debug = True

        # The TUI owns the terminal, so it only logs to files
        setup_logging(
            log_dir=config.log_dir,
            log_level="DEBUG" if config.debug else config.logging.level,
            json_format=config.logging.json_format,
            console_output=config.logging.console_output and not args.tui and not args.ask
        )

        if args.web:
            host = args.host or config.ui.web_host
            port = args.port or config.ui.web_port
            run_web_ui(config, host, port, config.debug)
        elif args.tui:
            run_terminal_ui(config)
        elif args.ask is not None:
            run_ask(config, args.ask)
        elif args.tools:
            run_list_tools(config)
        elif args.status:
            run_status_check(config)
        else:
            run_status_check(config)
            print("No mode specified. Use --web, --tui, --ask, or --help")
            print("\nQuick start:")
            print("  python main.py --web    # Start web UI")
            print("  python main.py --tui    # Start terminal UI")

        return 0

    except AgentError as e:
        print(f"\nError: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=args.debug)
        print(f"\nUnexpected error: {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
