import sys

from commit_genius.cli.main import main

sys.exit(main())
