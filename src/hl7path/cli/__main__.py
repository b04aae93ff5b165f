"""Allow ``python -m hl7path.cli``."""

import sys

from hl7path.cli.main import main

sys.exit(main())
