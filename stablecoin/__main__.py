import sys

from stablecoin.ops.cli import main

sys.exit(main())
