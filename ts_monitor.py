#!/usr/bin/env python3
"""
Time series monitor CLI entry point.

Usage:
    python ts_monitor.py [--symbol IBM] [--interval 60]

Or make it executable:
    chmod +x ts_monitor.py
    ./ts_monitor.py
"""
from cli.main import main

if __name__ == "__main__":
    main()
