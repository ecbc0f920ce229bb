import sys

from gdrivedl.cli import main

sys.exit(main())
