"""
Command line script to manage the material of signed requests:
    - generate a new key pair for the service
    - generate access tokens for the callers
    - sign a JSON payload as a third-party caller would do
    - verify a signed envelope
"""

from apisign.cli.base import CLICommandSuite, CLIParser
from apisign.cli.suites import keys_cli_suite, requests_cli_suite, tokens_cli_suite
from apisign.config import config_manager

from pathlib import Path

import asyncio


def build_parser() -> CLIParser:
    parser: CLIParser = CLIParser(
        prog="apisign",
        description="Command Line Interface to manage keys, tokens and signed requests",
    )

    suites: list[CLICommandSuite] = [
        keys_cli_suite,
        tokens_cli_suite,
        requests_cli_suite,
    ]

    for suite in suites:
        parser.add_command_suite(suite)

    return parser


async def main(command_line_args: list[str] | None = None) -> None:
    """Execute CLI command"""
    parser = build_parser()
    parser.parse_args(command_line_args)

    if parser.config:
        config_manager.load(Path(parser.config))

    await parser.selected_command.run(parser.args)  # type: ignore


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
