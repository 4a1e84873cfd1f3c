"""Allow ``python -m vocllm``."""

import sys

from vocllm.cli import main

if __name__ == "__main__":
    sys.exit(main())
