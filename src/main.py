"""
main.py - Run the GPIO button service from a source checkout

    python src/main.py --config path/to/buttons.yaml
"""

import sys

from buttons.app import run

# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(run())
