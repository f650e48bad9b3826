"""Module wrapper so running ``python -m persistent_include.cli`` matches the console script."""

from persistent_include.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
