#!/usr/bin/env python3
"""
Architecture Analysis CLI

Runs the archgraph pipeline from a source checkout without installing the
package. Equivalent to the `archgraph` console script.

Usage:
    python bin/analyze_architecture.py architecture.c4
    python bin/analyze_architecture.py architecture.c4 -f dot -o output/architecture.dot
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from archgraph.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
