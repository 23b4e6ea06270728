"""Module entrypoint for ``python -m lazyfm``."""

from .cli import main


if __name__ == "__main__":
    main()
