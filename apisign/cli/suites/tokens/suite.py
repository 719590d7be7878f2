"""Access tokens CLI suite"""

from apisign.cli.args import CLIArgs
from apisign.cli.base import CLICommand, CLICommandSuite
from apisign.cli.commands import CLICommands

from .functions import create_token

#
#   COMMANDS
#

create_command: CLICommand = CLICommand(
    command=CLICommands.create,
    arguments=[CLIArgs.LENGTH],
    function=create_token,
)

#
#   SUITE
#


tokens_cli_suite: CLICommandSuite = CLICommandSuite(
    entity="tokens",
    commands=[
        create_command,
    ],
)
