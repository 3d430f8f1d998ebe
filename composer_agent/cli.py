#!/usr/bin/env python3
"""
Interactive command line for the 1delta composer agent.
Offers a command mode for direct reads and an AI assistant mode; both go
through the same tool dispatcher.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Optional, Sequence

from openai import OpenAIError

from .assistant import AssistantSession, create_openai_client
from .config import CHAIN_CHOICES, DEFAULT_CHAIN_NAME, Settings, load_env
from .errors import ComposerError, ConfigurationError
from .runtime import ComposerRuntime, build_runtime
from .tools import ToolDispatcher, ToolOutcome

SEPARATOR = "-----------------------------"

MODE_CLI = "cli"
MODE_AI = "ai"
MODE_EXIT = "exit"

# command -> (tool name, label, needs token argument)
COMMANDS = {
    "get-tokens": ("get_supported_tokens", "Supported tokens", False),
    "get-chain": ("get_chain_info", "Chain info", False),
    "get-collateral": ("get_collateral_balance", "Collateral balance", True),
    "get-debt": ("get_debt_balance", "Debt balance", True),
    "get-health": ("get_health_factor", "Health factor", False),
}

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def format_outcome(label: str, outcome: ToolOutcome) -> str:
    if outcome.ok:
        return f"{label}: {json.dumps(outcome.result, indent=2)}"
    return f"Error ({outcome.error_code}): {outcome.error.message}"


def execute_command(dispatcher: ToolDispatcher, line: str, output: OutputFn = print) -> Optional[str]:
    """Run one command-mode line; returns a mode switch or ``None`` to continue."""

    args = line.split()
    if not args:
        return None
    command = args[0].lower()

    if command == MODE_EXIT:
        return MODE_EXIT
    if command == MODE_AI:
        return MODE_AI

    entry = COMMANDS.get(command)
    if entry is None:
        output("Unknown command. Type 'exit' to quit.")
        return None

    tool_name, label, needs_token = entry
    params = {}
    if needs_token:
        if len(args) < 2:
            output("Token symbol is required")
            return None
        params["token"] = args[1]

    output(format_outcome(label, dispatcher.invoke(tool_name, params)))
    return None


def run_cli_mode(runtime: ComposerRuntime, input_fn: InputFn = input, output: OutputFn = print) -> str:
    output(f"1delta Margin Trading ({runtime.deployment.chain.name.upper()})")
    output(SEPARATOR)
    output("Available commands:")
    output("1. get-tokens - Get supported tokens")
    output("2. get-chain - Get chain information")
    output("3. get-collateral <token> - Get collateral balance for a token")
    output("4. get-debt <token> - Get debt balance for a token")
    output("5. get-health - Get health factor")
    output("6. ai - Switch to AI assistant mode")
    output("7. exit - Exit the program")
    output(SEPARATOR)

    while True:
        try:
            line = input_fn("Enter command: ").strip()
        except (EOFError, KeyboardInterrupt):
            return MODE_EXIT

        switch = execute_command(runtime.dispatcher, line, output)
        if switch is not None:
            return switch
        output(SEPARATOR)


def run_ai_mode(
    runtime: ComposerRuntime,
    session: AssistantSession,
    input_fn: InputFn = input,
    output: OutputFn = print,
) -> str:
    output(f"1delta Margin Trading AI Assistant ({runtime.deployment.chain.name.upper()})")
    output(SEPARATOR)
    output("You can ask the AI about:")
    output("- Your collateral and debt balances")
    output("- Your health factor")
    output("- Supported tokens")
    output("- Chain information")
    output("Type 'cli' to switch back to command mode")
    output("Type 'exit' to quit")
    output(SEPARATOR)

    while True:
        try:
            prompt = input_fn("Ask the AI: ").strip()
        except (EOFError, KeyboardInterrupt):
            return MODE_EXIT

        if not prompt:
            continue
        if prompt.lower() == MODE_EXIT:
            return MODE_EXIT
        if prompt.lower() == MODE_CLI:
            return MODE_CLI

        output("\nProcessing your request...")
        try:
            answer = session.ask(prompt)
        except OpenAIError as exc:
            output(f"Error: {exc}")
        else:
            output(SEPARATOR)
            output("AI RESPONSE:")
            output(SEPARATOR)
            output(answer)
        output(SEPARATOR)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="1delta composer margin trading agent")
    parser.add_argument(
        "chain",
        nargs="?",
        default=DEFAULT_CHAIN_NAME,
        help=f"Chain to connect to ({', '.join(CHAIN_CHOICES)})",
    )
    parser.add_argument("--mode", choices=[MODE_CLI, MODE_AI], help="Start mode (default: ask)")
    parser.add_argument("--env-file", help="Path to a .env file with RPC URLs and keys")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, input_fn: InputFn = input) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env(args.chain, load_env(args.env_file))
        runtime = build_runtime(settings)
    except ComposerError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        sys.exit(1)

    print(f"Using chain: {runtime.deployment.chain.name.upper()}")

    mode = args.mode
    if mode is None:
        try:
            choice = input_fn("Choose mode (1 for CLI, 2 for AI assistant): ").strip()
        except (EOFError, KeyboardInterrupt):
            return
        mode = MODE_AI if choice == "2" else MODE_CLI

    session: Optional[AssistantSession] = None
    while mode != MODE_EXIT:
        if mode == MODE_CLI:
            mode = run_cli_mode(runtime, input_fn)
            continue

        if session is None:
            try:
                session = AssistantSession(
                    runtime.dispatcher,
                    create_openai_client(settings),
                    model=settings.model,
                    chain_name=runtime.deployment.chain.name,
                    max_steps=settings.ai_max_steps,
                    allow_writes=settings.ai_allow_writes,
                    on_tool=lambda outcome: print(f"Using tool: {outcome.tool}"),
                )
            except ConfigurationError as exc:
                print(f"Error: {exc.message}", file=sys.stderr)
                mode = MODE_CLI
                continue
        mode = run_ai_mode(runtime, session, input_fn)


if __name__ == "__main__":
    main()
