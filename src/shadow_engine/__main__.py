import sys

from shadow_engine.cli import main

sys.exit(main())
