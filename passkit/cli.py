"""CLI for passkit: generate, score, serve."""

import argparse
import sys

from rich import print
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import load_config
from .errors import GenerationError
from .evaluator import evaluate
from .generator import generate_many
from .logs import configure_logging
from .options import GenerationOptions

EXIT_FAILED_REQUIREMENTS = 1
EXIT_USAGE = 2

# soft_wrap: long passwords must stay on one line
console = Console(soft_wrap=True, highlight=False)

STRENGTH_STYLES = {
    "strong": "bold green",
    "moderate": "yellow",
    "weak": "dark_orange",
    "very_weak": "bold red",
}


def cmd_generate(args) -> int:
    try:
        options = GenerationOptions(
            length=args.length,
            include_uppercase=not args.no_upper,
            include_lowercase=not args.no_lower,
            include_numbers=not args.no_digits,
            include_symbols=args.symbols,
            exclude_ambiguous=not args.allow_ambiguous,
            exclude_chars=args.exclude or "",
            require_each=not args.no_require_each,
        )
        passwords = generate_many(args.count, options)
    except GenerationError as e:
        print(f"[red]{e.code}: {escape(e.message)}[/red]")
        return EXIT_USAGE
    for i, pw in enumerate(passwords):
        if args.count > 1:
            console.print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}")
        else:
            console.print(pw, markup=False)
    return 0


def cmd_score(args) -> int:
    requirements = {}
    if args.min_length is not None:
        requirements["minLength"] = args.min_length
    for flag, enabled in (
        ("requireUppercase", args.require_upper),
        ("requireLowercase", args.require_lower),
        ("requireNumbers", args.require_digits),
        ("requireSymbols", args.require_symbols),
    ):
        if enabled:
            requirements[flag] = True

    report = evaluate(args.password, requirements)
    style = STRENGTH_STYLES[report.strength]
    header = f"Score: {report.score} / 100 — [{style}]{report.strength}[/{style}]"

    checks = Table(show_header=True, header_style="bold cyan")
    checks.add_column("Check")
    checks.add_column("Value")
    for name, value in report.checks.items():
        checks.add_row(name, str(value))
    print(Panel(checks, title=header))

    if report.requirement_results:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Requirement")
        table.add_column("Met")
        for name, ok in report.requirement_results.items():
            table.add_row(name, "[green]yes[/green]" if ok else "[red]no[/red]")
        print(table)
        if not report.passed:
            print("[red]Password does not meet the requirements.[/red]")
            return EXIT_FAILED_REQUIREMENTS
    return 0


def cmd_serve(args) -> int:
    from .web.api import create_app

    cfg = load_config(args.config)
    for key in ("host", "port"):
        if getattr(args, key) is not None:
            cfg[key] = getattr(args, key)
    if args.debug:
        cfg["debug"] = True
    configure_logging(cfg["log_level"])

    app = create_app(cfg)
    app.run(host=cfg["host"], port=cfg["port"], debug=cfg["debug"])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="passkit")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=16, help="Password length (4-128)")
    gen.add_argument("--no-upper", action="store_true", help="Disable uppercase")
    gen.add_argument("--no-lower", action="store_true", help="Disable lowercase")
    gen.add_argument("--no-digits", action="store_true", help="Disable digits")
    gen.add_argument("--symbols", action="store_true", help="Enable symbols")
    gen.add_argument("--allow-ambiguous", action="store_true", help="Allow I, l, 1, O, 0, o")
    gen.add_argument("--exclude", type=str, help="Extra characters to exclude")
    gen.add_argument("--no-require-each", action="store_true",
                     help="Do not force one character from every enabled category")
    gen.add_argument("--count", type=int, default=1, help="How many passwords to generate (1-50)")
    gen.set_defaults(func=cmd_generate)

    sc = sub.add_parser("score", help="Score a password and check requirements")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.add_argument("--min-length", type=int, help="Required minimum length")
    sc.add_argument("--require-upper", action="store_true")
    sc.add_argument("--require-lower", action="store_true")
    sc.add_argument("--require-digits", action="store_true")
    sc.add_argument("--require-symbols", action="store_true")
    sc.set_defaults(func=cmd_score)

    sv = sub.add_parser("serve", help="Run the HTTP API")
    sv.add_argument("--config", "-c", type=str, help="Path to a JSON settings file")
    sv.add_argument("--host", type=str)
    sv.add_argument("--port", type=int)
    sv.add_argument("--debug", action="store_true")
    sv.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
