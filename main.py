#!/usr/bin/env python3
"""
Main entry point for the display projection calculator.

This script provides the command-line interface for computing off-center
projection parameters of physical displays around a fixed eye point.
"""

from viewcal.cli import main  # single source of truth

if __name__ == "__main__":
    main()
