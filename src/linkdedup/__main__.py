import sys

from linkdedup.cli import main

sys.exit(main())
