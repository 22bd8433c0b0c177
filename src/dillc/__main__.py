import sys

from dillc.cli import main

sys.exit(main())
