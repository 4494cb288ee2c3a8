import sys

from ghclip.cli import main

sys.exit(main())
