"""Command-line interface for iconsmith."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from iconsmith.core.config import AppConfig, load_app_config
from iconsmith.core.errors import ConfigurationError, IconsmithError, classify_error
from iconsmith.core.generation.client import create_generation_client
from iconsmith.core.generation.validator import ImageValidator
from iconsmith.core.service import IconSetService, ServiceResponse, error_response
from iconsmith.core.styles import list_styles
from iconsmith.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _setup(args: argparse.Namespace) -> AppConfig:
    """Load config and configure logging; CLI flags win over the file."""
    config = load_app_config(Path(args.config) if args.config else None)
    configure_logging(
        level=args.log_level or config.logging.level,
        format_string=config.logging.format,
        structured=args.structured_logs or config.logging.structured,
    )
    return config


def _print_response(response: ServiceResponse, *, as_json: bool) -> None:
    if as_json:
        console.print_json(data=response.body)
        return

    body = response.body
    if body.get("success"):
        console.print(f"[green]✅ Generated {len(body['icons'])} icons[/green]")
        for icon in body["icons"]:
            console.print(f"   {icon['id']}: {icon['url']}", soft_wrap=True)
        return

    console.print(f"[red]ERROR ({body['code']}): {body['error']}[/red]", soft_wrap=True)
    console.print(f"   Category: {body['category']}")
    if body.get("recoverable"):
        retry_after = body.get("retryAfter")
        hint = f" in {retry_after} seconds" if retry_after else ""
        console.print(f"   You can try again{hint}.")


def cmd_styles(args: argparse.Namespace) -> int:
    """Print the available style presets."""
    table = Table(title="Icon styles")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Prompt modifiers")
    for style in list_styles():
        table.add_row(style.id, style.name, style.description, ", ".join(style.prompt_modifiers))
    console.print(table)
    return EXIT_OK


async def generate_async(args: argparse.Namespace, config: AppConfig) -> int:
    """Generate an icon set and report the result.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        client = create_generation_client(
            config.provider.api_token,
            model=config.provider.model,
            retry_policy=config.retry.to_policy(),
        )
    except ConfigurationError as e:
        _print_response(error_response(classify_error(e)), as_json=args.json)
        if not args.json:
            console.print("\nSet your token first:")
            console.print("  export REPLICATE_API_TOKEN='your-token-here'")
        return EXIT_FAILURE

    service = IconSetService(client)
    payload = {"prompt": args.prompt, "style": args.style, "brandColors": args.colors or []}

    if not args.json:
        console.print(f"[bold]🎨 Generating icons:[/bold] {args.prompt} ({args.style})")

    response = await service.generate(payload)
    _print_response(response, as_json=args.json)
    return EXIT_OK if response.ok else EXIT_FAILURE


async def validate_async(args: argparse.Namespace, config: AppConfig) -> int:
    """Check a generated image's format and dimensions.

    Returns:
        Exit code (0 when both checks pass, 1 otherwise)
    """
    width = args.width or config.validator.expected_width
    height = args.height or config.validator.expected_height

    try:
        async with ImageValidator(timeout_s=config.validator.timeout_s) as validator:
            is_png = await validator.validate_format(args.url)
            has_size = await validator.validate_dimensions(args.url, width, height)
    except IconsmithError as e:
        console.print(f"[red]ERROR: {e.message}[/red]", soft_wrap=True)
        return EXIT_FAILURE

    mark = {True: "[green]✅[/green]", False: "[red]❌[/red]"}
    console.print(f"PNG format: {mark[is_png]}")
    console.print(f"Dimensions {width}x{height}: {mark[has_size]}")
    return EXIT_OK if is_png and has_size else EXIT_FAILURE


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="iconsmith",
        description="iconsmith - generate consistent icon sets from a text prompt",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to app config (.json/.yaml). Default: iconsmith.yaml if present",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    p.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit JSON log lines",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("styles", help="List available style presets")

    gen = sub.add_parser("generate", help="Generate a set of 4 icons")
    gen.add_argument("prompt", help="Icon theme, e.g. 'kitchen utensils'")
    gen.add_argument("--style", required=True, help="Style preset ID (see 'styles')")
    gen.add_argument(
        "--color",
        dest="colors",
        action="append",
        metavar="HEX",
        help="Brand color (#RGB or #RRGGBB); repeat for several",
    )
    gen.add_argument("--json", action="store_true", help="Print the response body as JSON")

    val = sub.add_parser("validate", help="Check that an image URL is a PNG of the expected size")
    val.add_argument("url", help="Image URL")
    val.add_argument("--width", type=int, default=None, help="Expected width (default: 512)")
    val.add_argument("--height", type=int, default=None, help="Expected height (default: 512)")

    return p


def main(argv: list[str] | None = None) -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    if args.cmd == "styles":
        sys.exit(cmd_styles(args))

    try:
        config = _setup(args)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        sys.exit(EXIT_FAILURE)

    if args.cmd == "generate":
        sys.exit(asyncio.run(generate_async(args, config)))
    if args.cmd == "validate":
        sys.exit(asyncio.run(validate_async(args, config)))


if __name__ == "__main__":
    main()
