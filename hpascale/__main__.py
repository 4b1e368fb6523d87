import sys

from hpascale.cli import main

sys.exit(main())
