"""Signed requests CLI suite"""

from apisign.cli.args import CLIArgs
from apisign.cli.base import CLICommand, CLICommandSuite
from apisign.cli.commands import CLICommands

from .functions import sign_request, verify_request

#
#   COMMANDS
#

sign_command: CLICommand = CLICommand(
    command=CLICommands.sign,
    arguments=[CLIArgs.PUBLIC_KEY, CLIArgs.TOKEN, CLIArgs.PAYLOAD],
    function=sign_request,
)

verify_command: CLICommand = CLICommand(
    command=CLICommands.verify,
    arguments=[CLIArgs.PRIVATE_KEY, CLIArgs.ENVELOPE, CLIArgs.MAX_AGE],
    function=verify_request,
)

#
#   SUITE
#


requests_cli_suite: CLICommandSuite = CLICommandSuite(
    entity="requests",
    commands=[
        sign_command,
        verify_command,
    ],
)
