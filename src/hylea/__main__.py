import sys

from hylea.cli import main

sys.exit(main())
