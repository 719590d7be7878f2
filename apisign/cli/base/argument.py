from argparse import ArgumentParser
from dataclasses import dataclass
from typing import Any, Type


@dataclass
class CLIArgument:
    """Option shared by one or more commands, registered once on the parser."""

    dash_string: str
    var_name: str
    var_type: Type
    default: Any = None
    help: str | None = None

    def add_to(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            self.dash_string,
            dest=self.var_name,
            type=self.var_type,
            default=self.default,
            help=self.help,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CLIArgument):
            return False

        return self.dash_string == other.dash_string

    def __hash__(self):
        return hash(self.dash_string)
