"""
Module entry-point that makes the package runnable with

    python -m persistent_include

The behaviour is identical to the *persistent-include-params* console script.
"""

from persistent_include.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
