"""Allow ``python -m bpmninject``."""

import sys

from bpmninject.cli import main

sys.exit(main())
