"""Key pairs CLI suite"""

from apisign.cli.args import CLIArgs
from apisign.cli.base import CLICommand, CLICommandSuite
from apisign.cli.commands import CLICommands

from .functions import create_key_pair

#
#   COMMANDS
#

create_command: CLICommand = CLICommand(
    command=CLICommands.create,
    arguments=[CLIArgs.SIZE, CLIArgs.OUTPUT],
    function=create_key_pair,
)

#
#   SUITE
#


keys_cli_suite: CLICommandSuite = CLICommandSuite(
    entity="keys",
    commands=[
        create_command,
    ],
)
