# floor_cutlist/__main__.py
# Package entrypoint so you can run:
#   python -m floor_cutlist --help
#
# Examples:
#   python -m floor_cutlist --job job.json
#   python -m floor_cutlist --room 2700x1800 --joist 45x45 --out out/ --no_plot

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
