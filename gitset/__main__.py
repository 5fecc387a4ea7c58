import sys

from gitset.cli.main import main

sys.exit(main())
