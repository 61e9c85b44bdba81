"""
Entry point for the `specguard` command-line interface.

specguard runs RSpec for a set of spec paths, either through a remote
test service or as a local process, and reports whether the run passed.

This module provides the main() entry point that delegates to the Click CLI.
"""


def main():
    """Main entry point for the specguard CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
