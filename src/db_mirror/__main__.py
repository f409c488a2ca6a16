import sys

from db_mirror.cli import main

sys.exit(main())
