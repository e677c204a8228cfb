#!/usr/bin/env python3
"""Generate ``*_summary.jpg`` contact sheets for every video under a directory.

Usage:
    python scripts/generate_summaries.py \
        --videos-dir /mnt/o/_obs/_test \
        --montage-interval-seconds 30 \
        --tile 5x5 --verbose
"""

import sys

from contact_sheet.cli import main

if __name__ == "__main__":
    sys.exit(main())
