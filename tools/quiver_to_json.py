"""
The quiver_to_json tool loads a provided Quiver library into a single JSON.

Usage:

    # To load all the lib contents into a single JSON
    python tools/quiver_to_json.py /path/to/Quiver.qvlibrary > quiver.json

    # To include the content of all resources as data URIs
    python tools/quiver_to_json.py --res /path/to/Quiver.qvlibrary > quiver.json
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from quiver.main import json_main


if __name__ == "__main__":
    sys.exit(json_main())
