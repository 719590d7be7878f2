from dataclasses import dataclass

from apisign.cli.base.command import CLICommand


@dataclass
class CLICommandSuite:
    """Commands available for one entity (keys, tokens, requests)"""

    entity: str
    commands: list[CLICommand]

    def get_command(self, name: str) -> CLICommand | None:
        return next((c for c in self.commands if c.command == name), None)
