#!/usr/bin/env python3
"""Convenience runner for the cheap ruler command line.

Usage:
    python run.py --coords route.geojson measure
"""
from cheap_ruler.cli import main

if __name__ == "__main__":
    main()
