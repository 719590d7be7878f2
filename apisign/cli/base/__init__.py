__all__ = [
    "CLIArgument",
    "CLICommand",
    "CLICommandSuite",
    "CLIParser",
]

from .argument import CLIArgument
from .command import CLICommand
from .command_suite import CLICommandSuite
from .parser import CLIParser
