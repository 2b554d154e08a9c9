"""Command line front end: reads Rust source and writes the generated files."""

import argparse
import logging
import sys
from pathlib import Path

from rustitect.errors import SourceSyntaxError, UnsupportedConstructError
from rustitect.load_config import load_config
from rustitect.processing import EXTENSIONS, OUTPUT_FORMATS, format_from_config, process

logger = logging.getLogger(__name__)


def output_path(output: Path, buffer_name: str, prefix: str = "") -> Path:
    """Return the file a buffer is written to, next to the output file."""
    return output.with_name(f"{prefix}{output.stem}{EXTENSIONS[buffer_name]}")


def run(args: argparse.Namespace) -> int:
    """Execute one conversion."""
    from_stdin = args.input_file in (None, "-")
    label = "<stdin>" if from_stdin else args.input_file
    if from_stdin:
        source = sys.stdin.read()
    else:
        try:
            source = Path(args.input_file).read_text(encoding="utf-8")
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    output = args.output
    if args.preserve_names:
        # written to the working directory, whatever -o says
        output = Path(Path(args.input_file).name)

    reference = None
    if output is not None:
        reference = output_path(output, "plantuml", args.prefix).name

    try:
        config = load_config(args.config)
        if args.strict:
            config["extract"] = {**(config.get("extract") or {}), "strict": True}
        output_format = args.format or format_from_config(config)
        buffers = process(source, output_format, config, diagram_reference=reference)
    except SourceSyntaxError as e:
        print(f"{label}:{e.line}:{e.column}: {e.message}", file=sys.stderr)
        return 1
    except UnsupportedConstructError as e:
        print(f"{label}:{e.construct}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if output is None:
        print("\n".join(buffers.values()))
        return 0

    for name, text in buffers.items():
        path = output_path(output, name, args.prefix)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", path)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the conversion."""
    ap = argparse.ArgumentParser(
        prog="rustitect",
        description=(
            "Generate arc42-style class documentation with a PlantUML diagram "
            "from documented Rust source."
        ),
    )
    ap.add_argument(
        "input_file",
        nargs="?",
        help="Rust source file to read (default: stdin, also with '-')",
    )
    ap.add_argument(
        "-o",
        "--output",
        "--output-file",
        dest="output",
        type=Path,
        help="Output file; every buffer is written next to it",
    )
    formats = ap.add_mutually_exclusive_group()
    formats.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: from config, else asciidoc)",
    )
    formats.add_argument(
        "--markdown-only",
        dest="format",
        action="store_const",
        const="markdown-only",
        help="Write only the Markdown document, without the diagram",
    )
    formats.add_argument(
        "--plantuml-only",
        dest="format",
        action="store_const",
        const="plantuml",
        help="Write only the PlantUML diagram",
    )
    ap.add_argument(
        "--preserve-names",
        action="store_true",
        help="Name output files after the input file, in the working directory",
    )
    ap.add_argument(
        "-p",
        "--prefix",
        default="",
        help="Prefix for output file names",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--strict",
        action="store_true",
        help="Fail on constructs that would otherwise be skipped with a warning",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = ap.parse_args(argv)
    if args.preserve_names and args.input_file in (None, "-"):
        ap.error("--preserve-names requires an input file")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
