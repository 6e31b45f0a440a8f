"""
Touchbase — Entry Point.

Single entry point: `python main.py` prints today's digest.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from touchbase.app import main

if __name__ == "__main__":
    main()
