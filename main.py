#!/usr/bin/env python3
"""
Ideas - Publish a short note as a bilingual blog post.

Command-line entry point:
  - Read an idea from the command line or stdin
  - Polish it, translate it (English <-> Chinese) and augment it with an LLM
  - Commit one Markdown document per language to GitHub
  - Print a summary

Usage:
    python main.py "my idea"                 # Post an idea
    echo "my idea" | python main.py          # Read the idea from stdin
    python main.py -t "Title" "my idea"      # Use a fixed title
    python main.py --improve "my idea"       # Only polish, print the result
    python main.py --dry-run "my idea"       # Run everything, commit to memory
    python main.py --remote "my idea"        # Send to the HTTP service instead

Exit codes: 0 posted, 1 failed, 3 partial commit, 130 interrupted.
"""

import argparse
import logging
import sys

import requests

from ideas.config import (
    DEBUG,
    IDEAS_URL,
    IDEAS_TOKEN,
    print_config_summary,
    validate_config,
)
from ideas.errors import IdeasError, ValidationError
from ideas.models.idea import IdeaSubmission
from ideas.pipeline import IdeaPipeline, PipelineConfig, PostStatus

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PARTIAL = 3
EXIT_INTERRUPTED = 130

# Seconds the CLI waits for the HTTP service to run the whole pipeline
REMOTE_TIMEOUT = 300


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="ideas",
        description="Polish, translate and publish a short idea as a bilingual post.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "An idea worth writing down"     Post an idea
  %(prog)s -t "Title" "..."                  Post with a fixed title
  %(prog)s --improve "..."                   Print the polished text only
  %(prog)s --dry-run -v "..."                Full run against an in-memory store
  %(prog)s --remote "..."                    Post through the HTTP service
        """,
    )

    parser.add_argument(
        "content",
        nargs="?",
        help="Idea text (read from stdin when omitted)",
    )

    parser.add_argument(
        "--title", "-t",
        default="",
        help="Idea title (generated when empty)",
    )

    parser.add_argument(
        "--augmented-file",
        metavar="PATH",
        help="Use this file as the augmented section instead of generating one",
    )

    parser.add_argument(
        "--improve",
        action="store_true",
        help="Only polish the idea and print the result; nothing is committed",
    )

    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Commit to an in-memory store and print the documents",
    )

    parser.add_argument(
        "--remote",
        action="store_true",
        help=f"Send the idea to the HTTP service at IDEAS_URL ({IDEAS_URL})",
    )

    # Output options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress and debug info",
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Ideas Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def read_content(args: argparse.Namespace) -> str:
    """Idea text from the positional argument or stdin."""
    if args.content is not None:
        return args.content
    return sys.stdin.read()


def read_augmented(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def run_remote(payload: dict, improve: bool) -> int:
    """Send the idea to the HTTP service."""
    endpoint = "improve" if improve else "post"
    url = f"{IDEAS_URL.rstrip('/')}/ideas/{endpoint}"
    headers = {"Content-Type": "application/json"}
    if IDEAS_TOKEN:
        headers["Authorization"] = f"Bearer {IDEAS_TOKEN}"

    try:
        response = requests.post(url, json=payload, headers=headers, timeout=REMOTE_TIMEOUT)
        result = response.json()
    except requests.RequestException as e:
        print(f"failed: {e}", file=sys.stderr)
        return EXIT_FAILED
    except ValueError:
        print(f"failed: HTTP {response.status_code}: {response.text[:200]}", file=sys.stderr)
        return EXIT_FAILED

    if result.get("ok"):
        print(result.get("content") if improve else result.get("message", "done"))
        return EXIT_OK

    print(f"failed: {result.get('message', 'unknown error')}", file=sys.stderr)
    return EXIT_PARTIAL if result.get("partial") else EXIT_FAILED


def run_local(submission: IdeaSubmission, args: argparse.Namespace) -> int:
    """Run the pipeline in this process."""
    config = PipelineConfig.from_env(dry_run=args.dry_run)
    pipeline = IdeaPipeline(config)

    if args.improve:
        result = pipeline.improve(submission)
        print(f"# {result.polished_title}\n\n{result.polished_content}")
        return EXIT_OK

    if not args.quiet:
        print("Posting idea...")

    result = pipeline.post(submission)

    if not args.quiet:
        print(result.to_summary())

    if args.dry_run and not args.quiet:
        for doc in result.documents:
            print(f"\n----- {doc.path} -----")
            print(doc.render())

    if result.status is PostStatus.DONE:
        return EXIT_OK
    if result.status is PostStatus.PARTIAL:
        print(f"\n⚠️  {result.error}", file=sys.stderr)
        return EXIT_PARTIAL
    print(f"\n❌ {result.error}", file=sys.stderr)
    return EXIT_FAILED


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = posted, 1 = error, 3 = partial commit).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or DEBUG) else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.show_config:
        show_config()
        return EXIT_OK

    try:
        content = read_content(args)
        augmented = read_augmented(args.augmented_file) if args.augmented_file else None

        if not content.strip():
            # Nothing to post
            return EXIT_OK

        if args.remote:
            payload = {"title": args.title, "content": content.strip()}
            if augmented:
                payload["augmented"] = augmented
            return run_remote(payload, args.improve)

        submission = IdeaSubmission(content=content, title=args.title, augmented=augmented)
        return run_local(submission, args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return EXIT_INTERRUPTED
    except ValidationError as e:
        print(f"invalid idea: {e}", file=sys.stderr)
        return EXIT_FAILED
    except IdeasError as e:
        print(f"\n❌ {e}", file=sys.stderr)
        return EXIT_FAILED
    except OSError as e:
        print(f"\n❌ {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
