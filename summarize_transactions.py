#!/usr/bin/env python3
"""Mint transactions income/spending summary.

This is a convenience entry point for running mint-ledger from a checkout.
It wraps the package CLI.

Usage:
    python summarize_transactions.py -i resources/transactions.csv -y 2012

For full documentation and options:
    python summarize_transactions.py --help
"""

import sys
from pathlib import Path

# Add src to path for development installs
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from mint_ledger.cli import main

if __name__ == "__main__":
    sys.exit(main())
