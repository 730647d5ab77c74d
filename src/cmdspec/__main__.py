"""Entry point for the cmdspec CLI."""

from cmdspec.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
