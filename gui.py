#!/usr/bin/env python3
"""
Personal Information Admin - loads the record list from the configured API
(`PI_API_URL`) and logs the outcome. Run from a checkout with `python gui.py`,
or use the installed `personal-info-admin` script.
"""
import sys
import os

# Add the current directory to sys.path to ensure imports work
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from gui.app import main

if __name__ == "__main__":
    main()
