"""Define how to visualize resources on the CLI"""

from pydantic import BaseModel


def show_one(resource: BaseModel) -> None:
    """Show one resource on the command line as indented JSON

    Args:
        resource (BaseModel): Single object to print
    """
    print(resource.model_dump_json(indent=2, by_alias=True))


def show_string(s: str) -> None:
    print(s)
