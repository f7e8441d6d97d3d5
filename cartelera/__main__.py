"""Entry point of the cartelera package. Allows python -m cartelera."""

import sys

from cartelera.etl.pipeline.cli import main

if __name__ == "__main__":
    sys.exit(main())
