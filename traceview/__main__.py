"""Module entrypoint for ``python -m traceview``."""

from .cli import main


if __name__ == "__main__":
    main()
