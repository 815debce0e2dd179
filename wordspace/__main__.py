"""Allow running as ``python -m wordspace``."""
import sys

from wordspace.cli import main

sys.exit(main())
