from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from apisign.cli.base.argument import CLIArgument


@dataclass
class CLICommand:
    """Binds a command name to its options and to the coroutine that executes it"""

    command: str
    arguments: list[CLIArgument]
    function: Callable[..., Awaitable[Any]]

    def select(self, values: dict[str, Any]) -> dict[str, Any]:
        """Keeps only the parsed values of the options of this command."""
        return {arg.var_name: values.get(arg.var_name, arg.default) for arg in self.arguments}

    async def run(self, args: dict[str, Any]) -> Any:
        return await self.function(**args)
