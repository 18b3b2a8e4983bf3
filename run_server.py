#!/usr/bin/env python3
# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Main entry point for the Cloudy AWS Resource Lister.

Usage:
    python run_server.py
"""

from cloudy.server import main

if __name__ == "__main__":
    main()
