"""Entry point for running Rustitect from a source checkout."""

from rustitect.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
