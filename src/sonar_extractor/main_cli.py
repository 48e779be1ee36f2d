"""Command line entry point.

Usage:
    sonar-extract extract "topic" [--model perplexity/sonar-pro] [--search ai] [--sort claim --desc]
    sonar-extract parse response.json [--csv claims.csv] [--json]
    sonar-extract key status|set KEY|delete
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.text import Text

from .config import AVAILABLE_MODELS, get_settings
from .llm.client import ProviderError, llm_client
from .log import get_logger, setup_logging
from .pipeline.run import ExtractionResult, process_envelope, process_response
from .query.sort import SortKey, SortState
from .query.view import ClaimsView
from .rendering.csv_export import export_csv
from .rendering.terminal import (
    payload_to_json,
    render_citations,
    render_claims_table,
    render_failure,
)
from .store.key_store import KeyVerificationError, delete_key, key_status, save_key

logger = get_logger("cli")
console = Console()


def load_response_file(path: Path) -> ExtractionResult:
    """A saved response envelope (JSON with 'choices') or plain model text."""
    text = path.read_text(encoding="utf-8")
    try:
        data: Optional[Dict[str, Any]] = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict) and "choices" in data:
        return process_envelope(data)
    return process_response(text)


def build_view(result: ExtractionResult, args: argparse.Namespace) -> ClaimsView:
    view = ClaimsView.from_rows(result.rows)
    if args.sort:
        key = SortKey(args.sort)
        view = view.model_copy(update={"sort": SortState(key=key)})
    if args.desc:
        view = view.with_sort(view.sort.key)
    if args.search:
        view = view.with_search_input(args.search).with_query(args.search)
    return view


def show_result(result: ExtractionResult, args: argparse.Namespace) -> int:
    if not result.ok:
        console.print(render_failure(result.error, result.content))
        if result.citations:
            console.print(render_citations(result.citations))
        return 1

    if args.json:
        # Plain print keeps stdout valid JSON for piping
        print(payload_to_json(result.payload))
        return 0

    view = build_view(result, args)
    rows = view.visible_rows()

    summary = result.payload.metadata.topic_summary
    if summary:
        console.print(Text.assemble(("Summary: ", "bold"), str(summary)))
    console.print(render_claims_table(rows, total=len(view.rows), sort=view.sort, query=view.query))
    if result.citations:
        console.print(render_citations(result.citations))

    if args.csv:
        Path(args.csv).write_text(export_csv(rows), encoding="utf-8")
        logger.info(f"Wrote {len(rows)} rows to {args.csv}")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    try:
        envelope = llm_client.fetch_completion(args.topic, model=args.model, temperature=args.temperature)
    except (ValueError, ProviderError) as e:
        console.print(str(e), style="bold red", markup=False)
        return 2
    if args.save_response:
        Path(args.save_response).write_text(json.dumps(envelope, indent=2), encoding="utf-8")
    return show_result(process_envelope(envelope), args)


def cmd_parse(args: argparse.Namespace) -> int:
    return show_result(load_response_file(Path(args.file)), args)


def cmd_key(args: argparse.Namespace) -> int:
    if args.action == "status":
        status = key_status()
        state = "configured" if status["is_configured"] else "not configured"
        console.print(f"API key {state} (source: {status['source']})")
        return 0 if status["is_configured"] else 1
    if args.action == "set":
        try:
            path = save_key(args.key or "", verify=not args.no_verify)
        except KeyVerificationError as e:
            console.print(str(e), style="bold red", markup=False)
            return 1
        console.print(f"API key saved to {path}", markup=False)
        return 0
    removed = delete_key()
    console.print("API key removed." if removed else "No saved API key.")
    return 0


def _add_view_options(parser: argparse.ArgumentParser):
    parser.add_argument("--search", help="Only show claims containing this text")
    parser.add_argument("--sort", choices=[k.value for k in SortKey], help="Sort column (default: category)")
    parser.add_argument("--desc", action="store_true", help="Sort descending")
    parser.add_argument("--csv", help="Also write the shown rows to this CSV file")
    parser.add_argument("--json", action="store_true", help="Print the parsed JSON instead of a table")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="sonar-extract", description="Extract sourced claims about a topic.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Ask the model about a topic")
    p_extract.add_argument("topic")
    p_extract.add_argument(
        "--model",
        default=settings.MODEL,
        help="One of: " + ", ".join(m["id"] for m in AVAILABLE_MODELS),
    )
    p_extract.add_argument("--temperature", type=float, default=settings.TEMPERATURE)
    p_extract.add_argument("--save-response", help="Write the raw response envelope to this file")
    _add_view_options(p_extract)
    p_extract.set_defaults(func=cmd_extract)

    p_parse = sub.add_parser("parse", help="Process a saved response or raw model text")
    p_parse.add_argument("file")
    _add_view_options(p_parse)
    p_parse.set_defaults(func=cmd_parse)

    p_key = sub.add_parser("key", help="Manage the OpenRouter API key")
    p_key.add_argument("action", choices=["status", "set", "delete"])
    p_key.add_argument("key", nargs="?")
    p_key.add_argument("--no-verify", action="store_true", help="Save without checking the key with OpenRouter")
    p_key.set_defaults(func=cmd_key)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
