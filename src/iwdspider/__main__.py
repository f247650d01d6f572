import sys

from iwdspider.cli import main

sys.exit(main())
