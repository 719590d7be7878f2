from apisign.cli.base import CLIArgument


class CLIArgs:
    """All possible args in the apisign CLI"""

    SIZE: CLIArgument = CLIArgument(
        dash_string="--size",
        var_name="size",
        var_type=int,
        help="Key size in bits (default from configuration)",
    )

    OUTPUT: CLIArgument = CLIArgument(
        dash_string="--output",
        var_name="output",
        var_type=str,
        help="Output directory (default: configured workdir)",
    )

    LENGTH: CLIArgument = CLIArgument(
        dash_string="--length",
        var_name="length",
        var_type=int,
        help="Access token length (default from configuration)",
    )

    PUBLIC_KEY: CLIArgument = CLIArgument(
        dash_string="--public-key",
        var_name="public_key",
        var_type=str,
        help="Path to the PEM public key (default: public_key.pem in the configured workdir)",
    )

    PRIVATE_KEY: CLIArgument = CLIArgument(
        dash_string="--private-key",
        var_name="private_key",
        var_type=str,
        help="Path to the PEM private key (default: private_key.pem in the configured workdir)",
    )

    TOKEN: CLIArgument = CLIArgument(dash_string="--token", var_name="token", var_type=str, help="Access token")

    PAYLOAD: CLIArgument = CLIArgument(
        dash_string="--payload",
        var_name="payload",
        var_type=str,
        help="Path to a JSON file with the request payload",
    )

    ENVELOPE: CLIArgument = CLIArgument(
        dash_string="--envelope",
        var_name="envelope",
        var_type=str,
        help="Path to a JSON file with the signed envelope",
    )

    MAX_AGE: CLIArgument = CLIArgument(
        dash_string="--max-age",
        var_name="max_age",
        var_type=float,
        help="Maximum age in seconds of a request, 0 disables the check",
    )
