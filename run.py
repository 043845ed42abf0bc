#!/usr/bin/env python3
"""Convenience runner for the focus route planner.

Usage:
    python run.py plan --origin 37.77,-122.42 --destination 38.58,-121.49
"""
import logging
import sys

from focus_route.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    sys.exit(main())
