# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Allow running the inventory server as a Python module.

Usage:
    python -m cloudy

This is equivalent to running:
    python run_server.py
"""

from .server import main

if __name__ == "__main__":
    main()
