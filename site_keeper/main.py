#!/usr/bin/env python3
"""
Site Keeper - maintenance tools for a static HTML site.

Copies remotely hosted images into the repository and rewrites the pages
to use them, and checks that every local link and fragment resolves.

Usage:
    site-keeper localize --root ./site --commit-message "Localize images"
    site-keeper check-links --root ./site

Exit status:
    0  success, no broken links, or nothing to do
    1  the tool itself failed
    2  broken links were found
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from site_keeper.linkcheck import LinkChecker, format_report
from site_keeper.localizer import SiteLocalizer
from site_keeper.scanner import create_extractor, load_documents
from site_keeper.utils.constants import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_IMAGE_HOST_PREFIX,
    DEFAULT_TIMEOUT,
    EXIT_FAILURE,
    EXIT_FINDINGS,
    EXIT_OK,
)
from site_keeper.utils.errors import SiteKeeperError
from site_keeper.utils.log import (
    get_logger,
    setup_logger,
    print_error,
    print_info,
)


logger = get_logger("main")


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors do not exit with the findings status."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command line parser.

    Returns:
        Configured argument parser
    """
    parser = ArgumentParser(
        prog='site-keeper',
        description='Maintenance tools for a static HTML site',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s localize --root ./site
    %(prog)s localize --image-host https://cdn.example.com/ --assets-dir assets/img
    %(prog)s check-links --root ./site --parser soup
        """
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write logs to this file'
    )

    # Options shared by both commands
    common = ArgumentParser(add_help=False)
    common.add_argument(
        '--root', '-r',
        type=str,
        default='.',
        help='Project root holding the HTML documents (default: .)'
    )
    common.add_argument(
        '--document', '-d',
        dest='documents',
        action='append',
        default=None,
        help='Only process this document (relative to root); may be repeated'
    )
    common.add_argument(
        '--parser',
        choices=['regex', 'soup'],
        default='regex',
        help='How attributes are extracted (default: regex)'
    )

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')
    commands.required = True

    localize = commands.add_parser(
        'localize',
        parents=[common],
        help='Download remote images and point the documents at local copies'
    )
    localize.add_argument(
        '--assets-dir',
        type=str,
        default=DEFAULT_ASSETS_DIR,
        help=f'Assets directory relative to root (default: {DEFAULT_ASSETS_DIR})'
    )
    localize.add_argument(
        '--image-host',
        type=str,
        default=DEFAULT_IMAGE_HOST_PREFIX,
        help=f'URL prefix of images to localize (default: {DEFAULT_IMAGE_HOST_PREFIX})'
    )
    localize.add_argument(
        '--timeout',
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f'Request timeout in seconds (default: {DEFAULT_TIMEOUT})'
    )
    localize.add_argument(
        '--commit-message', '-m',
        type=str,
        default=None,
        help='Label used by the calling workflow when committing the changes'
    )

    commands.add_parser(
        'check-links',
        parents=[common],
        help='Verify that local links, assets and fragments resolve'
    )

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    return build_parser().parse_args(argv)


async def run_localize(args: argparse.Namespace) -> int:
    """Run the localize command."""
    if not args.quiet:
        print_info(f"Project root: {os.path.abspath(args.root)}")
        print_info(f"Image host: {args.image_host}")
        if args.commit_message:
            print_info(f"Commit message: {args.commit_message}")

    extractor = create_extractor(args.parser, image_host_prefix=args.image_host)
    localizer = SiteLocalizer(
        root=args.root,
        assets_dir=args.assets_dir,
        documents=args.documents,
        timeout=args.timeout,
        extractor=extractor
    )

    await localizer.run()
    return EXIT_OK


def run_check_links(args: argparse.Namespace) -> int:
    """Run the check-links command."""
    extractor = create_extractor(args.parser)
    documents = load_documents(args.root, args.documents, extractor)

    if not documents:
        logger.warning(f"No HTML documents found in {os.path.abspath(args.root)}")
        return EXIT_OK

    result = LinkChecker(args.root, extractor).check(documents)
    print(format_report(result))

    return EXIT_OK if result.ok else EXIT_FINDINGS


async def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the site keeper.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error, 2 for broken links)
    """
    # Parse arguments
    args = parse_arguments(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else (logging.ERROR if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    try:
        if args.command == 'localize':
            return await run_localize(args)
        return run_check_links(args)

    except KeyboardInterrupt:
        print_error("Interrupted by user")
        return EXIT_FAILURE
    except (SiteKeeperError, ValueError) as e:
        print_error(f"Invalid input: {e}")
        return EXIT_FAILURE
    except Exception as e:
        print_error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_FAILURE


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
