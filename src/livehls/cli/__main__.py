#!/usr/bin/env python3
"""
CLI entry point for livehls.cli module.

This allows running: python -m livehls.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
