"""Allow ``python -m pngminify``."""

import sys

from pngminify.cli import main


sys.exit(main())
