import argparse
import sys
from collections.abc import Sequence

from boolsop.config import Settings, configure_logging
from boolsop.examples import ALL_EXAMPLES, build_examples, render_examples
from boolsop.render import NegationStyle, render_truth_table
from boolsop.result import Err, Ok
from boolsop.verify import format_report, verify


def handle_examples(settings: Settings, *, html: bool, style: str | None) -> int:
    negation_style = NegationStyle(style) if style else settings.negation_style
    sys.stdout.write(render_examples(build_examples(), html=html, style=negation_style))
    return 0


def handle_verify(
    settings: Settings,
    *,
    seed: int,
    rounds: int,
    variables: int,
    terms: int,
    verbose: bool,
) -> int:
    """Run the randomized property checks and print a summary."""
    if variables > settings.equivalence_limit:
        print(
            f"--variables {variables} exceeds BOOLSOP_EQUIVALENCE_LIMIT ({settings.equivalence_limit})",
            file=sys.stderr,
        )
        return 1
    result = verify(
        seed=seed,
        rounds=rounds,
        variables=variables,
        terms=terms,
        equivalence_limit=settings.equivalence_limit,
    )
    print(format_report(result, show_warnings=verbose))
    return 0 if result.passed else 1


def handle_truth_table(settings: Settings, name: str) -> int:
    for example, registry in build_examples():
        if example.name == name:
            sys.stdout.write(
                render_truth_table(example.result, registry, name, settings.negation_style)
            )
            return 0
    print(f"Unknown example: {name}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boolsop",
        description="Indeterminate booleans as canonical sums of products",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: examples
    examples_parser = subparsers.add_parser(
        "examples",
        help="Build and print the worked examples.",
    )
    examples_parser.add_argument(
        "--html",
        action="store_true",
        default=False,
        help="Render an HTML page instead of plain text.",
    )
    examples_parser.add_argument(
        "--style",
        choices=[s.value for s in NegationStyle],
        help="Negation marking for plain text (default: BOOLSOP_NEGATION_STYLE).",
    )

    # Command: verify
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check the algebraic laws on random expressions.",
    )
    verify_parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0).")
    verify_parser.add_argument(
        "--rounds", type=int, default=100, help="Number of random rounds (default: 100)."
    )
    verify_parser.add_argument(
        "--variables", type=int, default=4, help="Variables per round (default: 4)."
    )
    verify_parser.add_argument(
        "--terms", type=int, default=4, help="Most terms per random expression (default: 4)."
    )
    verify_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Also list warnings.",
    )

    # Command: truth-table
    table_parser = subparsers.add_parser(
        "truth-table",
        help="Print the truth table of one worked example.",
    )
    table_parser.add_argument(
        "name",
        choices=[factory.__name__.removesuffix("_example") for factory in ALL_EXAMPLES],
        help="Example name.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    match Settings.from_env():
        case Ok(settings):
            pass
        case Err(e):
            print(f"Invalid configuration: {e}", file=sys.stderr)
            return 2
    configure_logging(settings.log_level)

    match args.command:
        case "examples":
            return handle_examples(settings, html=args.html, style=args.style)
        case "verify":
            return handle_verify(
                settings,
                seed=args.seed,
                rounds=args.rounds,
                variables=args.variables,
                terms=args.terms,
                verbose=args.verbose,
            )
        case "truth-table":
            return handle_truth_table(settings, args.name)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
