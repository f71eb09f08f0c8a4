#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Vehicle & store inventory (SQLite), console entry.

Usage:
  python dealer.py [--config config.yaml] [--db path/to/file.db]

The menu adds, updates, lists and deletes stores and vehicles. A vehicle's
price is depreciated once, when it is created, according to its condition:
NEW 0%, SEMI_NEW 5%, USED 10%, DAMAGED 15%.
"""

from autostore.cli import main


if __name__ == "__main__":
    main()
