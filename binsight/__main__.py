"""
Binsight Module Entry Point
============================

Allows running the Binsight CLI via: python -m binsight
"""

from binsight.cli import main

if __name__ == "__main__":
    main()
