import sys
from gorth.cmdline import main

sys.exit(main())
