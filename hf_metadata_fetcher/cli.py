"""CLI commands for hub metadata resolution."""

import argparse
import json
import logging
import sys


def _log(msg: str):
    sys.stderr.write(f"[hf-metadata] {msg}\n")
    sys.stderr.flush()


def _add_repo_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "repo_id",
        help="Repository id (e.g., openai-community/gpt2)",
    )
    parser.add_argument(
        "--repo-type",
        choices=["model", "dataset", "space"],
        default="model",
        help="Repository type (default: model)",
    )
    parser.add_argument(
        "--glob",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Only include files matching this pattern (repeatable, e.g., --glob '*.json')",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hf-metadata",
        description="Resolve file metadata from a Hugging Face style hub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help="Hub endpoint (default: HF_ENDPOINT or https://huggingface.co)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Access token (default: discovered from HF_TOKEN, token files, ...)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # files subcommand
    files_parser = subparsers.add_parser(
        "files",
        help="List repository filenames",
    )
    _add_repo_arguments(files_parser)

    # metadata subcommand
    meta_parser = subparsers.add_parser(
        "metadata",
        help="Fetch metadata for repository files",
    )
    _add_repo_arguments(meta_parser)
    meta_parser.add_argument(
        "--revision",
        default="main",
        help="Branch, tag or commit to resolve (default: main)",
    )
    meta_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Concurrent HEAD probes (default: 1)",
    )

    # head subcommand
    head_parser = subparsers.add_parser(
        "head",
        help="Fetch metadata for a single file URL",
    )
    head_parser.add_argument(
        "url",
        help="File URL (e.g., https://huggingface.co/gpt2/resolve/main/config.json)",
    )

    # token subcommand
    subparsers.add_parser(
        "token",
        help="Show which source provides the access token",
    )

    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    if args.command is None:
        parser.print_help()
        return

    if args.command == "token":
        from .credentials import find_token

        found = find_token()
        if found is None:
            _log("No token found")
            sys.exit(1)
        print(found[0])
        return

    from .client import get_client
    from .errors import HubClientError
    from .models import Repo

    client = get_client(endpoint=args.endpoint, token=args.token)
    try:
        if args.command == "files":
            repo = Repo.parse(args.repo_id, args.repo_type)
            result = client.get_filenames(repo, args.glob)
            _log(f"{len(result)} files in {repo.id}")
        elif args.command == "metadata":
            repo = Repo.parse(args.repo_id, args.repo_type)
            metadata = client.get_files_metadata(
                repo, args.glob, revision=args.revision, max_workers=args.workers
            )
            result = [m.to_dict() for m in metadata]
            _log(f"Fetched metadata for {len(result)} files in {repo.id}")
        else:
            result = client.get_file_metadata(args.url).to_dict()
    except (HubClientError, ValueError) as e:
        _log(f"Error: {e}")
        sys.exit(1)
    finally:
        client.close()

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
