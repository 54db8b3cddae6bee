#!/usr/bin/env python3

import sys

from agent import AgentOrchestrator
from llm import get_llm_provider
from logger import get_logger

logger = get_logger()


def _build_orchestrator(services) -> AgentOrchestrator:
    provider = get_llm_provider(services.config)
    if provider is None:
        logger.error("The LLM is disabled. Set llm.enabled = true in the config.")
        sys.exit(1)
    return AgentOrchestrator(services, provider)


def cmd_ask(args, services):
    """Send one request to the agent and print the reply."""
    orchestrator = _build_orchestrator(services)
    print(orchestrator.handle(args.prompt, args.user))


def cmd_stream(args, services):
    """Send one request to the agent and print reply chunks as they arrive."""
    orchestrator = _build_orchestrator(services)
    for chunk in orchestrator.handle_streaming(args.prompt, args.user):
        print(chunk, end="", flush=True)
    print()


def setup_parser(subparsers):
    """Setup agent subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "agent",
        help="Talk to the finance agent",
        description="Log or review transactions in natural language",
    )

    agent_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available agent commands",
        dest="subcommand",
        required=True,
    )

    for name, func, help_text in (
        ("ask", cmd_ask, "Send a request and print the full reply"),
        ("stream", cmd_stream, "Send a request and stream the reply"),
    ):
        sub = agent_subparsers.add_parser(name, help=help_text)
        sub.add_argument("prompt", help='e.g. "I spent 5 on coffee today"')
        sub.add_argument("--user", required=True, help="User ID")
        sub.set_defaults(func=func)
