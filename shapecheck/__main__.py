"""Module entrypoint for `python -m shapecheck`.

Delegates to the CLI implementation.
"""

import sys

from .cli.main import main


if __name__ == "__main__":
    sys.exit(main())
