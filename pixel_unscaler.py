"""Script entry point for pixel unscaler.

Run directly from a checkout without installing:

    python pixel_unscaler.py sprite_x4.png sprite.png

For library use, import from the pixel_unscaler package:

    from pixel_unscaler import Config, detect_stride, process_image_bytes
"""
from __future__ import annotations

import sys

from pixel_unscaler import main

if __name__ == "__main__":
    sys.exit(main(sys.argv))
