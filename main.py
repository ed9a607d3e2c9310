"""Entry point for the Phrase key upload tool."""

import argparse

from phrase_upload.cli import run

__version__ = "0.1.0"


def main() -> None:
    """Parse CLI arguments and run the upload pipeline."""
    parser = argparse.ArgumentParser(
        prog="phrase-upload",
        description="Quickly upload multiple keys to Phrase",
    )
    parser.add_argument(
        "file",
        metavar="FILE",
        help="Input file of alternating key and translation lines",
    )
    parser.add_argument(
        "-t",
        "--access-token",
        help=(
            "The Phrase API token. Requires read and write scopes. "
            "Defaults to env var PHRASE_ACCESS_TOKEN if not given."
        ),
    )
    parser.add_argument(
        "-p",
        "--project-name",
        help="The name of the Phrase project to add the strings to.",
    )
    parser.add_argument(
        "-l",
        "--locale",
        help="The locale the strings will be uploaded to (default: en)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Optional YAML configuration file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every request and print a traceback on errors",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args()
    run(
        file=args.file,
        project_name=args.project_name,
        access_token=args.access_token,
        locale=args.locale,
        config_path=args.config,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    main()
