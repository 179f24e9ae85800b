import sys

from mediasync.cli import main

sys.exit(main())
