"""Entry point for the linehint LSP server."""

import sys

from linehint.cli import run


def main() -> None:
    """Run the server with command-line arguments."""
    sys.exit(run())


if __name__ == "__main__":
    main()
