import sys

from verifiedsms_core.cli import main

sys.exit(main())
