"""Module entrypoint for ``python -m lazydb``.

All argument parsing and runtime setup happen in ``lazydb.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
