"""Allow ``python -m kitecli``."""

from .cli import main

raise SystemExit(main())
