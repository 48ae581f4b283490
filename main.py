#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--preset {beginner,intermediate,expert}]
    python main.py demo [--games N] [--seed S]
"""
from minefield.cli import main


if __name__ == "__main__":
    main()
