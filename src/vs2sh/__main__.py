import sys

from vs2sh.cli import main

sys.exit(main())
