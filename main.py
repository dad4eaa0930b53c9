#!/usr/bin/env python3
"""
VDP Seeder
Main entry point.
"""

from vdp_seeder.cli import main

if __name__ == "__main__":
    main()
