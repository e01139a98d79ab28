"""Allow ``python -m funcapp_provisioner``."""

import sys

from funcapp_provisioner.cli import main

sys.exit(main())
