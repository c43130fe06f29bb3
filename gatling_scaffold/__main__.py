import sys

from gatling_scaffold.cli import main

sys.exit(main())
