"""Package entry point for ``python -m node_convert``.

RULES:
- Delegates to cli.main() and exits with its return code
"""

import sys

from node_convert.cli import main

if __name__ == "__main__":
    sys.exit(main())
