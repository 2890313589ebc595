"""Allow running the assistant with ``python -m todochat``."""
import sys

from todochat.cli.main import main

sys.exit(main())
