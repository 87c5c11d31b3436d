"""Command line interface for msupack."""

import sys
from typing import final

from msupack.features.apply import ApplyCancelledError, ApplyError
from msupack.features.sprites import SpriteCatalogError
from msupack.platform.logging import logger
from msupack.ui.cli.args import ArgumentParser
from msupack.ui.cli.args.options import ApplyArgs, CLIArgs, LibraryArgs, SpritesArgs
from msupack.ui.cli.commands import ApplyCommand, LibraryCommand, SpritesCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, ApplyArgs):
                _ = ApplyCommand(args).execute()
                return

            if isinstance(args, SpritesArgs):
                _ = SpritesCommand(args).execute()
                return

            assert isinstance(args, LibraryArgs)
            _ = LibraryCommand(args).execute()
            return

        except ApplyCancelledError as e:
            logger.warning("%s", e.message)
            sys.exit(130)
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except (ApplyError, SpriteCatalogError) as e:
            logger.error("%s", str(e))
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
