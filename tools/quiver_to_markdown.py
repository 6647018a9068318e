"""
The quiver_to_markdown tool converts a Quiver library into a set of Markdown files,
e.g. to back up notes on any service that renders Markdown.

Usage:

    python tools/quiver_to_markdown.py /path/to/Quiver.qvlibrary output_path
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from quiver.main import markdown_main


if __name__ == "__main__":
    sys.exit(markdown_main())
