"""Run the service with ``python -m mywebapp``."""

import sys

from mywebapp.server import main

if __name__ == "__main__":
    sys.exit(main())
