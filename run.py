"""
Entry Point Script (Bootstrap)
==============================
Runs the command line from a source checkout without installing.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so 'from roundedsurface...' resolves to the
   checkout.

Usage:
    $ python run.py --size 10 6 --radius 1 --depth 1 --front-depth 0.25 --back-depth 0.25 --show
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from roundedsurface.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
