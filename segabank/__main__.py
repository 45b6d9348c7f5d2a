import sys

from segabank.app import main

sys.exit(main())
