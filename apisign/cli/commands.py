class CLICommands:
    """Command reference list available for the apisign CLI."""

    create: str = "new"
    sign: str = "sign"
    verify: str = "verify"
