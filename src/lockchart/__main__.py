"""Module entrypoint for `python -m lockchart`."""

from lockchart.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
