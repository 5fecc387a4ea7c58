"""CLI Argument Parsing"""

import argparse
import argcomplete

from gitset import MODE_NAMES, __version__
from gitset.output import print_error, dim

COMMANDS = ['suggest', 'activate', 'status', 'deactivate', 'help']


class GitSetArgumentParser(argparse.ArgumentParser):
    """Exit with 1 and a pointer to 'gitset help' on usage errors."""

    def error(self, message):
        print_error(message)
        print(dim('Run "gitset help" to see available commands'))
        self.exit(1)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = GitSetArgumentParser(
        prog='gitset',
        description='Smart AI Docs & Versioning for GitHub Repositories.',
        epilog='Example: gitset suggest -m custom',
    )
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    suggest = subparsers.add_parser('suggest', help='Generate commit messages using AI-driven analysis of staged code changes.')
    suggest.add_argument('-m', '--mode', type=str, choices=MODE_NAMES, help='Commit message mode (semantic or custom)')
    suggest.add_argument('-c', '--commit-count', type=_positive_int, metavar='N', help='Number of previous commits to analyze for custom mode')
    suggest.add_argument('--max-lines', type=_positive_int, metavar='N', help='Skip files longer than N lines')

    activate = subparsers.add_parser('activate', help='Activate GitSet with a license key')
    activate.add_argument('license_key', nargs='?', metavar='licenseKey', help='Your GitSet license key')

    subparsers.add_parser('status', help='Check your GitSet license status and usage')
    subparsers.add_parser('deactivate', help='Deactivate and remove current license key')
    subparsers.add_parser('help', help='Show detailed help and usage information')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    # Bare 'gitset' generates a message, same as 'gitset suggest'
    if args.command is None:
        args.command = 'suggest'
        args.mode = None
        args.commit_count = None
        args.max_lines = None
    return args
