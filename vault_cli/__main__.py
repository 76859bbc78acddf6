"""
Module execution entry point.

Allows running with: python -m vault_cli
"""

import sys
from vault_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
